"""Exposure correlation: attribute each log day's weighted score to recent exposures."""
from datetime import date, timedelta
from typing import Dict, Iterable, Sequence, Set

from gut_insights.services.analysis.policy import AnalysisPolicy, DEFAULT_POLICY
from gut_insights.services.analysis.scoring import confounder_weight, symptom_score
from gut_insights.services.analysis.types import (
    CorrelationResult,
    ExposureEvent,
    ExposureKind,
    LogEntry,
)


def is_exposed(
    log: LogEntry, event: ExposureEvent, policy: AnalysisPolicy = DEFAULT_POLICY
) -> bool:
    """
    Whether event counts as an exposure for the given log day.

    Foods count when eaten 0 to window_hours before the log date, both bounds
    inclusive; later meals never count. A supplement regimen is a standing
    exposure and counts on every day from its start date onwards.
    """
    if event.kind is ExposureKind.SUPPLEMENT:
        return log.log_date >= event.occurred_on

    lag = log.log_date - event.occurred_on
    return timedelta(0) <= lag <= timedelta(hours=policy.window_hours)


def correlate(
    logs: Iterable[LogEntry],
    exposures: Sequence[ExposureEvent],
    policy: AnalysisPolicy = DEFAULT_POLICY,
) -> CorrelationResult:
    """
    Accumulate score * weight per exposure identity across all log days.

    Every included (log, exposure) pair adds one occurrence. Separately, a log
    whose raw score is at or below low_severity_max_score adds one to the
    low-severity tally of each food seen in its window, at most once per food
    per calendar day.
    """
    result = CorrelationResult()
    low_severity_days: Dict[str, Set[date]] = {}

    for log in logs:
        score = symptom_score(log, policy)
        contribution = score * confounder_weight(log, policy)
        low_severity_foods = []

        for event in exposures:
            if not is_exposed(log, event, policy):
                continue

            result.accumulator_for(event).add(
                contribution, log.log_date, policy.max_example_dates
            )

            if (
                event.kind is ExposureKind.FOOD
                and score <= policy.low_severity_max_score
                and event.identity not in low_severity_foods
            ):
                low_severity_foods.append(event.identity)

        for identity in low_severity_foods:
            counted = low_severity_days.setdefault(identity, set())
            if log.log_date in counted:
                continue
            counted.add(log.log_date)
            result.record_low_severity(identity)

    return result
