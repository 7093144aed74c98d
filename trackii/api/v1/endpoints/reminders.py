from datetime import datetime
from typing import Any, List, Optional
from fastapi import APIRouter, Depends

from trackii import models, schemas
from trackii.api import deps
from trackii.reminders.service import ReminderEngine

router = APIRouter()


@router.get("", response_model=schemas.DataResponse[List[schemas.Occurrence]])
def list_reminders(
    limit: Optional[int] = None,
    now: datetime = Depends(deps.get_now),
    engine: ReminderEngine = Depends(deps.get_reminder_engine),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Upcoming medication doses over the next 24 hours for all of the user's
    profiles, soonest first. Dismissed doses are left out.
    """
    return {"data": engine.list_reminders(current_user.id, now, limit)}


@router.post("/{key}/dismiss", response_model=schemas.DataResponse[schemas.DismissalResult])
def dismiss_reminder(
    key: str,
    now: datetime = Depends(deps.get_now),
    engine: ReminderEngine = Depends(deps.get_reminder_engine),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    return {"data": engine.dismiss(current_user.id, key, now)}
