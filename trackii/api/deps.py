from datetime import datetime
from typing import Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from trackii import crud, models, schemas
from trackii.core import security
from trackii.core.config import settings
from trackii.db.session import SessionLocal
from trackii.reminders.config import settings as reminder_settings
from trackii.reminders.dismissals import DismissalStore, RedisDismissalStore, SqlDismissalStore
from trackii.reminders.service import ReminderEngine
from trackii.utils.timezone import utc_now

reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login"
)


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_now() -> datetime:
    """Request time, UTC-aware."""
    return utc_now()


def get_current_user(
    db: Session = Depends(get_db), token: str = Depends(reusable_oauth2)
) -> models.User:
    try:
        payload = security.decode_access_token(token)
        token_data = schemas.TokenPayload(**payload)
    except (JWTError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )
    if token_data.sub is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )
    user = crud.user.get(db, id=token_data.sub)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user


def get_current_active_user(
    current_user: models.User = Depends(get_current_user),
) -> models.User:
    if not crud.user.is_active(current_user):
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user


def get_dismissal_store(db: Session = Depends(get_db)) -> DismissalStore:
    if reminder_settings.DISMISSAL_BACKEND == "redis":
        from trackii.core.redis import get_redis_client
        return RedisDismissalStore(get_redis_client())
    return SqlDismissalStore(db)


def get_reminder_engine(
    db: Session = Depends(get_db),
    store: DismissalStore = Depends(get_dismissal_store),
) -> ReminderEngine:
    return ReminderEngine(db, store)
