from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from trackii import crud, models, schemas
from trackii.api import deps

router = APIRouter()

WEIGHT_SERIES_LENGTH = 30


def get_owned_profile_or_404(db: Session, profile_id: int, user_id: int) -> models.Profile:
    profile = crud.profile.get_owned(db, profile_id=profile_id, user_id=user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Not found")
    return profile


@router.get("", response_model=schemas.DataResponse[List[schemas.Profile]])
def list_profiles(
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Profiles owned by the current user, newest first.
    """
    return {"data": crud.profile.get_multi_by_owner(db, user_id=current_user.id)}


@router.post("", response_model=schemas.DataResponse[schemas.Profile], status_code=status.HTTP_201_CREATED)
def create_profile(
    *,
    db: Session = Depends(deps.get_db),
    profile_in: schemas.ProfileCreate,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    profile = crud.profile.create_with_owner(db, obj_in=profile_in, user_id=current_user.id)
    return {"data": profile}


@router.get("/{profile_id}", response_model=schemas.DataResponse[schemas.Profile])
def read_profile(
    *,
    db: Session = Depends(deps.get_db),
    profile_id: int,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    return {"data": get_owned_profile_or_404(db, profile_id, current_user.id)}


@router.patch("/{profile_id}", response_model=schemas.DataResponse[schemas.Profile])
def update_profile(
    *,
    db: Session = Depends(deps.get_db),
    profile_id: int,
    profile_in: schemas.ProfileUpdate,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    profile = get_owned_profile_or_404(db, profile_id, current_user.id)
    profile = crud.profile.update(db, db_obj=profile, obj_in=profile_in)
    return {"data": profile}


@router.delete("/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_profile(
    *,
    db: Session = Depends(deps.get_db),
    profile_id: int,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Response:
    profile = get_owned_profile_or_404(db, profile_id, current_user.id)
    crud.profile.remove(db, db_obj=profile)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{profile_id}/stats/weight", response_model=schemas.WeightStatsResponse)
def weight_stats(
    *,
    db: Session = Depends(deps.get_db),
    profile_id: int,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Last 30 weight logs in chronological order, with latest/min/max/avg.
    """
    get_owned_profile_or_404(db, profile_id, current_user.id)
    latest_desc = crud.health_log.get_latest_by_category(
        db, profile_id=profile_id, category="weight", limit=WEIGHT_SERIES_LENGTH
    )
    series = [{"date": log.date, "value": log.value} for log in reversed(latest_desc)]
    values = [point["value"] for point in series if point["value"] is not None]

    stats = {"latest": None, "min": None, "max": None, "avg": None, "count": len(values)}
    if values:
        stats.update(
            latest=values[-1],
            min=min(values),
            max=max(values),
            avg=round(sum(values) / len(values), 2),
        )
    return {"series": series, "stats": stats}


@router.get("/{profile_id}/stats/summary", response_model=schemas.DataResponse[List[schemas.CategorySummary]])
def summary_stats(
    *,
    db: Session = Depends(deps.get_db),
    profile_id: int,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Log count and most recent log date per category.
    """
    get_owned_profile_or_404(db, profile_id, current_user.id)
    return {"data": crud.health_log.get_category_summary(db, profile_id=profile_id)}
