import asyncio
from types import SimpleNamespace
from unittest import mock

from conftest import API
from trackii.services import assistant


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def fake_client(**create_kwargs):
    client = mock.MagicMock()
    client.chat.completions.create = mock.AsyncMock(**create_kwargs)
    return client


def test_medical_questions_are_declined_without_model_call():
    client = fake_client(return_value=completion("take two"))
    with mock.patch.object(assistant, "get_client", return_value=client):
        answer = asyncio.run(assistant.answer_question("What dosage of ibuprofen for a fever?"))

    assert answer == assistant.MEDICAL_DECLINE
    client.chat.completions.create.assert_not_called()


def test_model_answer_is_used():
    client = fake_client(return_value=completion("  Open a profile and tap Logs.  "))
    with mock.patch.object(assistant, "get_client", return_value=client):
        answer = asyncio.run(assistant.answer_question("How do I log weight?"))

    assert answer == "Open a profile and tap Logs."
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["messages"][0] == {"role": "system", "content": assistant.SYSTEM_PROMPT}
    assert kwargs["messages"][1]["content"] == "How do I log weight?"


def test_model_failure_falls_back_to_local_answers():
    client = fake_client(side_effect=RuntimeError("rate limited"))
    with mock.patch.object(assistant, "get_client", return_value=client):
        answer = asyncio.run(assistant.answer_question("how do I log weight"))

    assert answer.startswith("To log weight")


def test_empty_model_answer_falls_back():
    client = fake_client(return_value=completion(""))
    with mock.patch.object(assistant, "get_client", return_value=client):
        answer = asyncio.run(assistant.answer_question("set a reminder"))

    assert answer.startswith("Medication reminders")


def test_local_answers():
    assert assistant.local_answer("") == assistant.EMPTY_QUESTION
    assert assistant.local_answer("How do I delete profile Sam?").startswith("Open the profile card menu")
    assert assistant.local_answer("add a profile").startswith("Profiles:")
    assert assistant.local_answer("track water").startswith("To track water")
    assert assistant.local_answer("weather today") == assistant.GENERIC_ANSWER


def test_long_questions_are_truncated():
    client = fake_client(return_value=completion("ok"))
    with mock.patch.object(assistant, "get_client", return_value=client):
        asyncio.run(assistant.answer_question("x" * 5000))

    sent = client.chat.completions.create.call_args.kwargs["messages"][1]["content"]
    assert len(sent) == assistant.MAX_QUESTION_LENGTH


def test_ask_endpoint_without_api_key(client, auth_headers):
    response = client.post(f"{API}/ai/ask", json={"q": "how do I add a prescription"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["answer"].startswith("Go to a profile")


def test_ask_endpoint_requires_auth(client):
    assert client.post(f"{API}/ai/ask", json={"q": "hi"}).status_code == 401
