from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session

from trackii.crud.base import CRUDBase
from trackii.models.health_log import HealthLog
from trackii.models.profile import Profile
from trackii.schemas.health_log import HealthLogCreate, HealthLogUpdate


class CRUDHealthLog(CRUDBase[HealthLog, HealthLogCreate, HealthLogUpdate]):
    def get_owned(self, db: Session, *, log_id: int, user_id: int) -> Optional[HealthLog]:
        return (
            db.query(self.model)
            .join(Profile, Profile.id == HealthLog.profile_id)
            .filter(HealthLog.id == log_id, Profile.user_id == user_id)
            .first()
        )

    def get_page_for_profile(
        self,
        db: Session,
        *,
        profile_id: int,
        category: Optional[str] = None,
        skip: int = 0,
        limit: int = 25,
    ) -> Tuple[List[HealthLog], int]:
        query = db.query(self.model).filter(HealthLog.profile_id == profile_id)
        if category:
            query = query.filter(HealthLog.category == category)
        total = query.count()
        items = (
            query.order_by(HealthLog.date.desc(), HealthLog.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return items, total

    def get_latest_by_category(
        self, db: Session, *, profile_id: int, category: str, limit: int = 30
    ) -> List[HealthLog]:
        return (
            db.query(self.model)
            .filter(HealthLog.profile_id == profile_id, HealthLog.category == category)
            .order_by(HealthLog.date.desc(), HealthLog.id.desc())
            .limit(limit)
            .all()
        )

    def get_category_summary(self, db: Session, *, profile_id: int) -> List[dict]:
        rows = (
            db.query(
                HealthLog.category,
                func.count(HealthLog.id).label("count"),
                func.max(HealthLog.date).label("latest"),
            )
            .filter(HealthLog.profile_id == profile_id)
            .group_by(HealthLog.category)
            .order_by(HealthLog.category)
            .all()
        )
        return [{"category": r.category, "count": r.count, "latest": r.latest} for r in rows]


health_log = CRUDHealthLog(HealthLog)
