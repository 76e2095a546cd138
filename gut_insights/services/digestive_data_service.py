"""Reads a user's logs and exposure history and maps them to engine types."""
import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, List
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from gut_insights.database import SessionLocal
from gut_insights.models import (
    ConsumedMeal,
    DigestiveLog,
    FoodExperiment,
    SupplementRegimen,
)
from gut_insights.services.analysis.types import (
    Experiment,
    ExposureEvent,
    ExposureKind,
    LogEntry,
)


logger = logging.getLogger(__name__)

UNKNOWN_IDENTITY = "unknown"


@dataclass(frozen=True)
class AnalysisInputs:
    """Everything the engine needs for one request."""

    logs: List[LogEntry]
    exposures: List[ExposureEvent]
    experiments: List[Experiment]


def log_entry_from_row(row: DigestiveLog) -> LogEntry:
    return LogEntry.build(
        log_date=row.log_date,
        log_time=row.log_time,
        severity=row.severity,
        bloating=row.bloating,
        pain=row.pain,
        gas=row.gas,
        reflux=row.reflux,
        urgency=row.urgency,
        bristol=row.bristol,
        sleep_hours=row.sleep_hours,
        stress=row.stress,
        energy=row.energy,
        alcohol=row.alcohol,
        caffeine=row.caffeine,
        notes=row.notes,
    )


def meal_identity(meal: ConsumedMeal) -> str:
    """Description first, then the recipe reference."""
    return meal.description or meal.recipe_id or UNKNOWN_IDENTITY


class DigestiveDataService:
    """
    Loads analysis inputs for one user and lookback window.

    Each fetch opens its own session from session_factory, which is what lets
    load() run the four reads concurrently.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def fetch_logs(self, user_id: UUID, since: date) -> List[LogEntry]:
        with self.session_factory() as db:
            rows = (
                db.query(DigestiveLog)
                .filter(
                    DigestiveLog.user_id == user_id,
                    DigestiveLog.log_date >= since,
                )
                .order_by(DigestiveLog.log_date, DigestiveLog.id)
                .all()
            )
            return [log_entry_from_row(row) for row in rows]

    def fetch_consumed_meals(self, user_id: UUID, since: date) -> List[ExposureEvent]:
        with self.session_factory() as db:
            rows = (
                db.query(ConsumedMeal)
                .filter(
                    ConsumedMeal.user_id == user_id,
                    ConsumedMeal.consumed_date >= since,
                )
                .order_by(ConsumedMeal.consumed_date, ConsumedMeal.id)
                .all()
            )
            return [
                ExposureEvent(
                    kind=ExposureKind.FOOD,
                    identity=meal_identity(row),
                    occurred_on=row.consumed_date,
                )
                for row in rows
            ]

    def fetch_active_regimens(self, user_id: UUID) -> List[ExposureEvent]:
        """Regimens without an end date, regardless of when they started."""
        with self.session_factory() as db:
            rows = (
                db.query(SupplementRegimen)
                .options(joinedload(SupplementRegimen.supplement))
                .filter(
                    SupplementRegimen.user_id == user_id,
                    SupplementRegimen.end_date.is_(None),
                )
                .order_by(SupplementRegimen.start_date, SupplementRegimen.id)
                .all()
            )
            return [
                ExposureEvent(
                    kind=ExposureKind.SUPPLEMENT,
                    identity=row.supplement.name if row.supplement else UNKNOWN_IDENTITY,
                    occurred_on=row.start_date,
                )
                for row in rows
            ]

    def fetch_experiments(self, user_id: UUID) -> List[Experiment]:
        with self.session_factory() as db:
            rows = (
                db.query(FoodExperiment)
                .options(joinedload(FoodExperiment.food_item))
                .filter(FoodExperiment.user_id == user_id)
                .order_by(FoodExperiment.start_date, FoodExperiment.id)
                .all()
            )
            return [
                Experiment(
                    identity=row.food_item.name if row.food_item else UNKNOWN_IDENTITY,
                    start_date=row.start_date,
                    end_date=row.end_date,
                )
                for row in rows
            ]

    async def load(self, user_id: UUID, since: date) -> AnalysisInputs:
        """
        Run the four independent reads concurrently and join them.

        Any data-store error propagates to the caller; nothing is retried.
        """
        logs, meals, regimens, experiments = await asyncio.gather(
            asyncio.to_thread(self.fetch_logs, user_id, since),
            asyncio.to_thread(self.fetch_consumed_meals, user_id, since),
            asyncio.to_thread(self.fetch_active_regimens, user_id),
            asyncio.to_thread(self.fetch_experiments, user_id),
        )

        logger.info(
            "Loaded analysis inputs for user %s since %s: %d logs, %d meals, %d regimens, %d experiments",
            user_id,
            since,
            len(logs),
            len(meals),
            len(regimens),
            len(experiments),
        )

        return AnalysisInputs(
            logs=logs,
            exposures=meals + regimens,
            experiments=experiments,
        )


def get_digestive_data_service() -> DigestiveDataService:
    """FastAPI dependency returning the default data service."""
    return DigestiveDataService()
