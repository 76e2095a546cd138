"""Policy constants for the digestive analysis engine, gathered in one place."""
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from gut_insights.config import Settings, settings as app_settings


@dataclass(frozen=True)
class AnalysisPolicy:
    """
    Fixed thresholds the engine runs with.

    None of these are learned. with_overrides() builds variants that hit
    boundary values explicitly.
    """

    # Look-back window before a log day in which a meal counts as an exposure
    window_hours: int = 72

    # Exposures seen fewer times than this are never ranked
    min_occurrences: int = 2

    # Raw score at or below which a day counts towards the safe-food tally
    low_severity_max_score: int = 2

    # Suspects averaging above this are excluded from the safe list
    problematic_score: float = 3.0

    min_logs_for_scoring: int = 3
    min_logs_for_narrative: int = 5

    top_n: int = 10
    max_example_dates: int = 3

    # Symptom scoring
    score_min: int = 1
    score_max: int = 5
    neutral_score: int = 3
    secondary_scale_max: float = 5.0
    bristol_ideal: float = 4.0
    bristol_base_score: float = 2.0

    # Confounder weighting: (min populated fields, weight), checked in order
    completeness_weights: Tuple[Tuple[int, float], ...] = ((7, 1.1), (4, 1.0), (2, 0.85))
    sparse_weight: float = 0.7
    high_stress_threshold: float = 4.0
    stress_penalty: float = 0.5
    alcohol_penalty: float = 0.5

    narrative_timeout_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "AnalysisPolicy":
        """Build a policy with the operator-tunable values taken from settings."""
        settings = settings or app_settings
        return cls(
            window_hours=settings.analysis_window_hours,
            min_occurrences=settings.analysis_min_occurrences,
            min_logs_for_scoring=settings.analysis_min_logs,
            min_logs_for_narrative=settings.analysis_min_logs_for_narrative,
            top_n=settings.analysis_top_n,
            narrative_timeout_seconds=settings.narrative_timeout_seconds,
        )

    def with_overrides(self, **changes) -> "AnalysisPolicy":
        return replace(self, **changes)


DEFAULT_POLICY = AnalysisPolicy()
