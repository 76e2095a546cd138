from sqlalchemy import Column, Integer, String, Text, Date, Time, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from gut_insights.database import Base


class ConsumedMeal(Base):
    """A meal the user actually ate on a given day."""

    __tablename__ = "consumed_meals"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    consumed_date = Column(Date, nullable=False)
    meal_time = Column(Time, nullable=True)
    meal_label = Column(
        String(50), nullable=False, default="meal"
    )  # 'breakfast', 'lunch', 'dinner', 'snack'
    description = Column(Text)  # Display name, e.g. "Curry de garbanzos"
    recipe_id = Column(String(64))  # Upstream recipe reference, if any
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="consumed_meals")

    __table_args__ = (
        Index("idx_consumed_meals_user_date", "user_id", "consumed_date"),
    )
