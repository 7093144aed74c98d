from datetime import datetime
from pydantic import BaseModel


class Occurrence(BaseModel):
    key: str
    scheduled_at: datetime
    title: str
    type: str = "medication"
    profile_id: int
    profile_name: str
    notes: str = ""

    class Config:
        from_attributes = True


class DismissalResult(BaseModel):
    key: str
    dismissed: bool = True
    until: datetime

    class Config:
        from_attributes = True
