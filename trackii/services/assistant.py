"""
App-usage assistant.

Answers "how do I ..." questions about Trackii. Medical questions are always
declined without calling the model. When an OpenAI key is configured the
model answers first; any failure falls back to the local rule table.
"""
import logging
from typing import List, Optional, Tuple

from openai import AsyncOpenAI

from trackii.core.config import settings

logger = logging.getLogger(__name__)

MAX_QUESTION_LENGTH = 2000

SYSTEM_PROMPT = """You are a helpful assistant for a family health tracking app called Trackii.
Only answer questions about using the app (profiles, logs, weight, water, prescriptions, reminders).
Do NOT provide medical advice. If user asks medical/diagnosis/treatment questions, politely decline and advise to consult a professional.
Be concise."""

MEDICAL_DECLINE = "I can't provide medical advice. Please consult a qualified healthcare professional."
EMPTY_QUESTION = "Please type a question about using Trackii."
GENERIC_ANSWER = (
    "I can help with Trackii features like profiles, logs, prescriptions, and reminders. "
    "What would you like to do?"
)

MEDICAL_HINTS = (
    "diagnos", "symptom", "treat", "dose", "dosage", "side effect", "interact",
    "is it safe", "should i take", "what should i take", "pain", "fever",
    "prescribe", "contraindication", "pregnancy safe",
)

# (phrases, answer) pairs, checked in order
LOCAL_ANSWERS: List[Tuple[Tuple[str, ...], str]] = [
    (
        ("log weight", "add weight", "weight log"),
        "To log weight: open a profile → Logs → + Quick Log → category: weight → enter value → Save.",
    ),
    (
        ("view weight", "weight chart", "trend"),
        "Open a profile → Chart tab to see recent weight. The dashboard may also show a quick chart if available.",
    ),
    (
        ("reminder", "notification"),
        "Medication reminders are generated from active prescriptions. "
        "Dismiss a card to hide it until its next slot/day.",
    ),
    (
        ("prescription", "rx"),
        "Go to a profile → Prescriptions → + Add Rx. Set frequency (e.g., daily, 2x/day, every 8h) and mark active.",
    ),
    (
        ("delete profile", "remove profile"),
        "Open the profile card menu and choose Delete. This cannot be undone.",
    ),
    (
        ("profile",),
        "Profiles: Dashboard → + Add Profile. You can set type (general, pregnancy, child) "
        "and toggle active/inactive.",
    ),
    (
        ("water", "hydrate"),
        "To track water: open profile → Logs → + Quick Log → category: water → enter cups/oz and Save.",
    ),
    (
        ("meal", "food"),
        "To log meals: open profile → Logs → + Quick Log → category: meal → add notes if useful and Save.",
    ),
    (
        ("faq", "help", "how"),
        "Ask about: profiles, weight logs, water logs, prescriptions, reminders, insights. "
        "I can't give medical advice.",
    ),
]

_client: Optional[AsyncOpenAI] = None


def get_client() -> Optional[AsyncOpenAI]:
    global _client
    if not settings.OPENAI_API_KEY:
        return None
    if _client is None:
        _client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
    return _client


def is_medical(question: str) -> bool:
    text = (question or "").lower()
    return any(hint in text for hint in MEDICAL_HINTS)


def local_answer(question: str) -> str:
    text = (question or "").lower()
    if not text.strip():
        return EMPTY_QUESTION
    if is_medical(text):
        return MEDICAL_DECLINE
    for phrases, answer in LOCAL_ANSWERS:
        if any(phrase in text for phrase in phrases):
            return answer
    return GENERIC_ANSWER


async def ask_llm(question: str) -> Optional[str]:
    """Ask the configured model; None when unavailable, failing or empty."""
    client = get_client()
    if client is None:
        return None
    try:
        response = await client.chat.completions.create(
            model=settings.ASSISTANT_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": question},
            ],
            max_tokens=settings.ASSISTANT_MAX_TOKENS,
            temperature=settings.ASSISTANT_TEMPERATURE,
        )
        content = response.choices[0].message.content
    except Exception as e:
        logger.warning(f"Assistant model call failed, using local answers: {e}")
        return None
    answer = (content or "").strip()
    return answer or None


async def answer_question(question: str) -> str:
    question = (question or "")[:MAX_QUESTION_LENGTH]
    if is_medical(question):
        return MEDICAL_DECLINE
    answer = await ask_llm(question)
    if answer:
        return answer
    return local_answer(question)
