import math
from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from trackii import crud, models, schemas
from trackii.api import deps

router = APIRouter()


def get_owned_prescription_or_404(db: Session, prescription_id: int, user_id: int) -> models.Prescription:
    prescription = crud.prescription.get_owned(db, prescription_id=prescription_id, user_id=user_id)
    if not prescription:
        raise HTTPException(status_code=404, detail="Not found")
    return prescription


@router.get("/profiles/{profile_id}", response_model=schemas.PageResponse[schemas.Prescription])
def list_prescriptions(
    *,
    db: Session = Depends(deps.get_db),
    profile_id: int,
    active: Optional[bool] = None,
    limit: int = Query(25, ge=1, le=200),
    page: int = Query(1, ge=1),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Prescriptions of one profile, most recently started first.
    """
    if not crud.profile.owns(db, profile_id=profile_id, user_id=current_user.id):
        raise HTTPException(status_code=404, detail="Not found")
    items, total = crud.prescription.get_page_for_profile(
        db, profile_id=profile_id, active=active, skip=(page - 1) * limit, limit=limit
    )
    return {
        "data": items,
        "meta": {"total": total, "page": page, "pages": math.ceil(total / limit), "limit": limit},
    }


@router.post("", response_model=schemas.DataResponse[schemas.Prescription], status_code=status.HTTP_201_CREATED)
def create_prescription(
    *,
    db: Session = Depends(deps.get_db),
    prescription_in: schemas.PrescriptionCreate,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    if not crud.profile.owns(db, profile_id=prescription_in.profile_id, user_id=current_user.id):
        raise HTTPException(status_code=404, detail="Not found")
    prescription = crud.prescription.create_for_profile(db, obj_in=prescription_in)
    return {"data": prescription}


@router.patch("/{prescription_id}", response_model=schemas.DataResponse[schemas.Prescription])
def update_prescription(
    *,
    db: Session = Depends(deps.get_db),
    prescription_id: int,
    prescription_in: schemas.PrescriptionUpdate,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    prescription = get_owned_prescription_or_404(db, prescription_id, current_user.id)
    prescription = crud.prescription.update(db, db_obj=prescription, obj_in=prescription_in)
    return {"data": prescription}


@router.delete("/{prescription_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_prescription(
    *,
    db: Session = Depends(deps.get_db),
    prescription_id: int,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Response:
    prescription = get_owned_prescription_or_404(db, prescription_id, current_user.id)
    crud.prescription.remove(db, db_obj=prescription)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
