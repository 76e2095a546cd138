"""Turn correlator accumulators into the suspect ranking and the safe-food list."""
from typing import List

from gut_insights.services.analysis.policy import AnalysisPolicy, DEFAULT_POLICY
from gut_insights.services.analysis.scoring import round_half_up
from gut_insights.services.analysis.types import (
    CorrelationResult,
    ExposureKind,
    RankedExposures,
    SafeExposure,
    ScoredExposure,
)


def score_exposures(
    correlation: CorrelationResult, policy: AnalysisPolicy = DEFAULT_POLICY
) -> List[ScoredExposure]:
    """
    Every exposure seen at least min_occurrences times, best-first by average.

    Foods are listed before supplements so that equal averages keep a stable,
    food-first order.
    """
    scored = []
    for kind in (ExposureKind.FOOD, ExposureKind.SUPPLEMENT):
        for (acc_kind, identity), acc in correlation.accumulators.items():
            if acc_kind is not kind or acc.count < policy.min_occurrences:
                continue
            scored.append(
                ScoredExposure(
                    identity=identity,
                    kind=kind,
                    avg_score=round_half_up(acc.weighted_score / acc.count, 1),
                    occurrences=acc.count,
                    example_dates=tuple(acc.example_dates),
                )
            )

    scored.sort(key=lambda s: s.avg_score, reverse=True)
    return scored


def rank(
    correlation: CorrelationResult, policy: AnalysisPolicy = DEFAULT_POLICY
) -> RankedExposures:
    """Top suspects plus safe foods, both capped at top_n."""
    scored = score_exposures(correlation, policy)

    # Checked against every qualifying suspect, not only the ones shown
    problematic = {s.identity for s in scored if s.avg_score > policy.problematic_score}

    safe_candidates = [
        SafeExposure(identity=identity, safe_days=days)
        for identity, days in correlation.low_severity_tally.items()
        if identity not in problematic
    ]
    safe_candidates.sort(key=lambda s: s.safe_days, reverse=True)

    return RankedExposures(
        suspects=scored[: policy.top_n],
        safe=safe_candidates[: policy.top_n],
    )
