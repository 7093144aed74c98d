from typing import List, Optional, Sequence, Tuple
from sqlalchemy.orm import Session

from trackii.crud.base import CRUDBase
from trackii.models.profile import Profile
from trackii.schemas.profile import ProfileCreate, ProfileUpdate


class CRUDProfile(CRUDBase[Profile, ProfileCreate, ProfileUpdate]):
    def create_with_owner(self, db: Session, *, obj_in: ProfileCreate, user_id: int) -> Profile:
        obj_in_data = obj_in.model_dump()
        obj_in_data["user_id"] = user_id
        return self.create(db, obj_in=obj_in_data)

    def get_multi_by_owner(self, db: Session, *, user_id: int) -> List[Profile]:
        return (
            db.query(self.model)
            .filter(Profile.user_id == user_id)
            .order_by(Profile.created_at.desc(), Profile.id.desc())
            .all()
        )

    def get_owned(self, db: Session, *, profile_id: int, user_id: int) -> Optional[Profile]:
        """Return the profile only when it belongs to ``user_id``."""
        return (
            db.query(self.model)
            .filter(Profile.id == profile_id, Profile.user_id == user_id)
            .first()
        )

    def owns(self, db: Session, *, profile_id: int, user_id: int) -> bool:
        return self.get_owned(db, profile_id=profile_id, user_id=user_id) is not None

    def find_by_owner(self, db: Session, *, user_id: int) -> Sequence[Tuple[int, str]]:
        """(id, name) pairs for every profile owned by ``user_id``."""
        rows = db.query(Profile.id, Profile.name).filter(Profile.user_id == user_id).all()
        return [(row.id, row.name) for row in rows]


profile = CRUDProfile(Profile)
