from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from trackii.db.base import Base


class Profile(Base):
    """A tracked individual (self, child, dependent) owned by a user."""
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    dob = Column(DateTime, nullable=True)
    type = Column(String, nullable=False, default="general")  # general, pregnancy, child
    due_date = Column(DateTime, nullable=True)
    sex = Column(String, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="profiles")
    logs = relationship("HealthLog", back_populates="profile", cascade="all, delete-orphan")
    prescriptions = relationship("Prescription", back_populates="profile", cascade="all, delete-orphan")
