import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..core.database import Base

TITLE_MAX_LENGTH = 30


class ClientSession(Base):
    """Anonymous visitor identity. The id is the cookie value itself."""

    __tablename__ = "sessions"

    id = Column(String(36), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    meal_links = relationship("MealSession", back_populates="session")


class Meal(Base):
    __tablename__ = "meals"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(32), nullable=False, index=True)
    description = Column(Text, nullable=True)
    in_diet = Column(Boolean, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    # insertion order; breaks ties between equal created_at values
    seq = Column(Integer, nullable=False, unique=True)

    owner_link = relationship(
        "MealSession",
        back_populates="meal",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def owner_session_id(self) -> str | None:
        return self.owner_link.session_id if self.owner_link else None


class MealSession(Base):
    """Ownership record: exactly one per meal, written together with it."""

    __tablename__ = "meal_sessions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    meal_id = Column(String(36), ForeignKey("meals.id", ondelete="CASCADE"), nullable=False, unique=True)
    session_id = Column(String(36), ForeignKey("sessions.id"), nullable=False, index=True)

    meal = relationship("Meal", back_populates="owner_link")
    session = relationship("ClientSession", back_populates="meal_links")
