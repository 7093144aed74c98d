from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session

from trackii.crud.base import CRUDBase
from trackii.models.prescription import Prescription
from trackii.models.profile import Profile
from trackii.schemas.prescription import PrescriptionCreate, PrescriptionUpdate
from trackii.utils.timezone import to_utc_naive, utc_now


class CRUDPrescription(CRUDBase[Prescription, PrescriptionCreate, PrescriptionUpdate]):
    def create_for_profile(self, db: Session, *, obj_in: PrescriptionCreate) -> Prescription:
        obj_in_data = obj_in.model_dump()
        if obj_in_data.get("start_date") is None:
            obj_in_data["start_date"] = utc_now()
        return self.create(db, obj_in=obj_in_data)

    def get_owned(self, db: Session, *, prescription_id: int, user_id: int) -> Optional[Prescription]:
        return (
            db.query(self.model)
            .join(Profile, Profile.id == Prescription.profile_id)
            .filter(Prescription.id == prescription_id, Profile.user_id == user_id)
            .first()
        )

    def get_page_for_profile(
        self,
        db: Session,
        *,
        profile_id: int,
        active: Optional[bool] = None,
        skip: int = 0,
        limit: int = 25,
    ) -> Tuple[List[Prescription], int]:
        query = db.query(self.model).filter(Prescription.profile_id == profile_id)
        if active is not None:
            query = query.filter(Prescription.active == active)
        total = query.count()
        items = (
            query.order_by(Prescription.start_date.desc(), Prescription.created_at.desc(), Prescription.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return items, total

    def find_eligible(
        self, db: Session, *, profile_ids: Sequence[int], now: datetime
    ) -> List[Prescription]:
        """Active prescriptions that have started and not yet ended at ``now``."""
        if not profile_ids:
            return []
        now_naive = to_utc_naive(now)
        return (
            db.query(self.model)
            .filter(
                Prescription.profile_id.in_(list(profile_ids)),
                Prescription.active.is_(True),
                Prescription.start_date <= now_naive,
                or_(Prescription.end_date.is_(None), Prescription.end_date >= now_naive),
            )
            .order_by(Prescription.id)
            .all()
        )


prescription = CRUDPrescription(Prescription)
