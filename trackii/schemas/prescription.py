from typing import Optional
from datetime import datetime
from pydantic import BaseModel, field_validator


class PrescriptionBase(BaseModel):
    name: str
    dosage: Optional[str] = None
    frequency: str = "daily"
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    active: bool = True
    notes: Optional[str] = None


class PrescriptionCreate(PrescriptionBase):
    profile_id: int

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v


class PrescriptionUpdate(BaseModel):
    name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    active: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("name", "frequency", "start_date", "active")
    @classmethod
    def not_null(cls, v):
        # Omit the field to leave it unchanged
        if v is None:
            raise ValueError("field cannot be null")
        return v


class Prescription(PrescriptionBase):
    id: int
    profile_id: int
    start_date: datetime
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
