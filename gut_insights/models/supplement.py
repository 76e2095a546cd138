from sqlalchemy import Column, Integer, Float, String, Date, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from gut_insights.database import Base


class Supplement(Base):
    """A supplement in the user's cabinet."""

    __tablename__ = "supplements"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String(255), nullable=False)
    brand = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="supplements")
    regimens = relationship(
        "SupplementRegimen", back_populates="supplement", cascade="all, delete-orphan"
    )


class SupplementRegimen(Base):
    """A standing supplement intake schedule. Active while end_date is NULL."""

    __tablename__ = "supplement_regimens"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    supplement_id = Column(
        Integer, ForeignKey("supplements.id", ondelete="CASCADE"), nullable=False
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    dose_value = Column(Float, nullable=False, default=1.0)
    dose_unit = Column(String(20), nullable=False, default="unit")
    frequency = Column(String(50), nullable=False, default="daily")
    time_of_day = Column(String(20))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="supplement_regimens")
    supplement = relationship("Supplement", back_populates="regimens")

    __table_args__ = (
        Index("idx_supplement_regimens_user_id", "user_id"),
    )
