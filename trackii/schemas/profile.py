from typing import Literal, Optional
from datetime import datetime
from pydantic import BaseModel, field_validator, model_validator

ProfileType = Literal["general", "pregnancy", "child"]


# Shared properties
class ProfileBase(BaseModel):
    name: str
    dob: Optional[datetime] = None
    type: ProfileType = "general"
    due_date: Optional[datetime] = None
    sex: Optional[str] = None
    active: bool = True
    notes: Optional[str] = None


# Properties to receive on profile creation
class ProfileCreate(ProfileBase):
    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v

    @model_validator(mode="after")
    def due_date_for_pregnancy(self) -> "ProfileCreate":
        if self.type == "pregnancy" and self.due_date is None:
            raise ValueError("due_date required for pregnancy")
        return self


# Properties to receive on profile update
class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    dob: Optional[datetime] = None
    type: Optional[ProfileType] = None
    due_date: Optional[datetime] = None
    sex: Optional[str] = None
    active: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            raise ValueError("name cannot be null")
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("type", "active")
    @classmethod
    def not_null(cls, v):
        # Omit the field to leave it unchanged
        if v is None:
            raise ValueError("field cannot be null")
        return v


# Properties to return to client
class Profile(ProfileBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
