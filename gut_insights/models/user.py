from sqlalchemy import Column, String, DateTime, Boolean, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from gut_insights.database import Base


class User(Base):
    """User model for authentication and data ownership."""

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    sessions = relationship(
        "Session", back_populates="user", cascade="all, delete-orphan"
    )
    digestive_logs = relationship(
        "DigestiveLog", back_populates="user", cascade="all, delete-orphan"
    )
    consumed_meals = relationship(
        "ConsumedMeal", back_populates="user", cascade="all, delete-orphan"
    )
    supplements = relationship(
        "Supplement", back_populates="user", cascade="all, delete-orphan"
    )
    supplement_regimens = relationship(
        "SupplementRegimen", back_populates="user", cascade="all, delete-orphan"
    )
    food_experiments = relationship(
        "FoodExperiment", back_populates="user", cascade="all, delete-orphan"
    )
