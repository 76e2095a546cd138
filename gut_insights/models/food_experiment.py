from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from gut_insights.database import Base


class FoodItem(Base):
    """Catalog food that experiments can target."""

    __tablename__ = "food_items"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), unique=True, nullable=False)
    category = Column(String(100), nullable=False, default="other")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    experiments = relationship("FoodExperiment", back_populates="food_item")


class FoodExperiment(Base):
    """User-declared elimination or reintroduction trial for one food."""

    __tablename__ = "food_experiments"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    food_item_id = Column(
        Integer, ForeignKey("food_items.id", ondelete="CASCADE"), nullable=False
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    target_dose = Column(String(100))
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="food_experiments")
    food_item = relationship("FoodItem", back_populates="experiments")

    __table_args__ = (
        Index("idx_food_experiments_user_id", "user_id"),
    )
