from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, field_validator

LogCategory = Literal["weight", "meal", "water", "feed", "sleep", "growth"]


class HealthLogBase(BaseModel):
    category: LogCategory
    value: Optional[float] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    notes: Optional[str] = None


class HealthLogCreate(HealthLogBase):
    profile_id: int
    date: Optional[datetime] = None


class HealthLogUpdate(BaseModel):
    category: Optional[LogCategory] = None
    value: Optional[float] = None
    date: Optional[datetime] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("category", "date")
    @classmethod
    def not_null(cls, v):
        # Omit the field to leave it unchanged
        if v is None:
            raise ValueError("field cannot be null")
        return v


class HealthLog(HealthLogBase):
    id: int
    profile_id: int
    date: datetime
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class WeightPoint(BaseModel):
    date: datetime
    value: Optional[float] = None


class WeightStats(BaseModel):
    latest: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    avg: Optional[float] = None
    count: int = 0


class WeightStatsResponse(BaseModel):
    series: List[WeightPoint]
    stats: WeightStats


class CategorySummary(BaseModel):
    category: str
    count: int
    latest: Optional[datetime] = None
