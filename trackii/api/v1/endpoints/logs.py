import math
from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from trackii import crud, models, schemas
from trackii.api import deps
from trackii.models.health_log import MEASURED_CATEGORIES
from trackii.schemas.health_log import LogCategory

router = APIRouter()


def _require_positive_value(category: Optional[str], value: Optional[float]) -> None:
    if category in MEASURED_CATEGORIES and (value is None or value <= 0):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="value must be a positive number for weight/water",
        )


def get_owned_log_or_404(db: Session, log_id: int, user_id: int) -> models.HealthLog:
    log = crud.health_log.get_owned(db, log_id=log_id, user_id=user_id)
    if not log:
        raise HTTPException(status_code=404, detail="Not found")
    return log


@router.get("/profiles/{profile_id}", response_model=schemas.PageResponse[schemas.HealthLog])
def list_logs(
    *,
    db: Session = Depends(deps.get_db),
    profile_id: int,
    type: Optional[LogCategory] = None,
    limit: int = Query(25, ge=1, le=200),
    page: int = Query(1, ge=1),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Logs of one profile, newest first, optionally filtered by category.
    """
    if not crud.profile.owns(db, profile_id=profile_id, user_id=current_user.id):
        raise HTTPException(status_code=404, detail="Not found")
    items, total = crud.health_log.get_page_for_profile(
        db, profile_id=profile_id, category=type, skip=(page - 1) * limit, limit=limit
    )
    return {
        "data": items,
        "meta": {"total": total, "page": page, "pages": math.ceil(total / limit), "limit": limit},
    }


@router.post("", response_model=schemas.DataResponse[schemas.HealthLog], status_code=status.HTTP_201_CREATED)
def create_log(
    *,
    db: Session = Depends(deps.get_db),
    log_in: schemas.HealthLogCreate,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    if not crud.profile.owns(db, profile_id=log_in.profile_id, user_id=current_user.id):
        raise HTTPException(status_code=404, detail="Not found")
    _require_positive_value(log_in.category, log_in.value)

    obj_in = log_in.model_dump()
    if obj_in.get("date") is None:
        obj_in.pop("date")
    log = crud.health_log.create(db, obj_in=obj_in)
    return {"data": log}


@router.patch("/{log_id}", response_model=schemas.DataResponse[schemas.HealthLog])
def update_log(
    *,
    db: Session = Depends(deps.get_db),
    log_id: int,
    log_in: schemas.HealthLogUpdate,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    log = get_owned_log_or_404(db, log_id, current_user.id)
    changed = log_in.model_fields_set
    if "value" in changed or "category" in changed:
        value = log_in.value if "value" in changed else log.value
        _require_positive_value(log_in.category or log.category, value)
    log = crud.health_log.update(db, db_obj=log, obj_in=log_in)
    return {"data": log}


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_log(
    *,
    db: Session = Depends(deps.get_db),
    log_id: int,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Response:
    log = get_owned_log_or_404(db, log_id, current_user.id)
    crud.health_log.remove(db, db_obj=log)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
