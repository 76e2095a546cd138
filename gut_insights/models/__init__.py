"""
Database models for Gut Insights.

Import all models here so Alembic can detect them for migrations.
"""

from gut_insights.database import Base
from gut_insights.models.user import User
from gut_insights.models.session import Session
from gut_insights.models.digestive_log import DigestiveLog
from gut_insights.models.consumed_meal import ConsumedMeal
from gut_insights.models.supplement import Supplement, SupplementRegimen
from gut_insights.models.food_experiment import FoodItem, FoodExperiment

__all__ = [
    "Base",
    "User",
    "Session",
    "DigestiveLog",
    "ConsumedMeal",
    "Supplement",
    "SupplementRegimen",
    "FoodItem",
    "FoodExperiment",
]
