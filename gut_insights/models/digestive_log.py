from sqlalchemy import (
    Column,
    Integer,
    Float,
    String,
    Text,
    Date,
    Time,
    DateTime,
    ForeignKey,
    Index,
    Boolean,
    Uuid,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from gut_insights.database import Base


class DigestiveLog(Base):
    """Self-reported daily digestive symptom entry with optional confounders."""

    __tablename__ = "digestive_logs"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    log_date = Column(Date, nullable=False)
    log_time = Column(Time, nullable=True)
    symptom = Column(String(100))  # Free label, e.g. "bloating", "reflux"

    # Overall severity (1-5)
    severity = Column(Integer, nullable=True)

    # Secondary symptom intensities (0-5 each)
    bloating = Column(Integer, nullable=True)
    pain = Column(Integer, nullable=True)
    gas = Column(Integer, nullable=True)
    reflux = Column(Integer, nullable=True)
    urgency = Column(Integer, nullable=True)

    bristol = Column(Integer, nullable=True)  # Bristol stool scale, 1-7

    # Confounders
    sleep_hours = Column(Float, nullable=True)
    stress = Column(Integer, nullable=True)  # 0-5
    energy = Column(Integer, nullable=True)  # 0-5
    alcohol = Column(Boolean, nullable=True)
    caffeine = Column(Boolean, nullable=True)

    associated_meal = Column(String(255))  # User's own guess, not used for attribution
    notes = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="digestive_logs")

    __table_args__ = (
        Index("idx_digestive_logs_user_date", "user_id", "log_date"),
    )
