from typing import Any
from fastapi import APIRouter, Depends

from trackii import models, schemas
from trackii.api import deps
from trackii.services.assistant import answer_question

router = APIRouter()


@router.post("/ask", response_model=schemas.DataResponse[schemas.AskAnswer])
async def ask(
    body: schemas.AskRequest,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Answer a question about using the app. Never gives medical advice.
    """
    return {"data": {"answer": await answer_question(body.q)}}
