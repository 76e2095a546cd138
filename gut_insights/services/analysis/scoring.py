"""Per-entry symptom severity score and confounder reliability weight."""
import math

from gut_insights.services.analysis.policy import AnalysisPolicy, DEFAULT_POLICY
from gut_insights.services.analysis.types import LogEntry, clamp


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from negative infinity (2.5 -> 3, -2.05 -> -2.0)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def symptom_score(entry: LogEntry, policy: AnalysisPolicy = DEFAULT_POLICY) -> int:
    """
    Severity of one log entry on a 1-5 scale (5 = worst digestion).

    Tiers are tried in priority order and never blended:
    1. explicit overall severity
    2. mean of the reported secondary symptoms, rescaled onto 1-5
    3. distance of the Bristol stool index from the ideal midpoint
    4. neutral default
    """
    low, high = policy.score_min, policy.score_max

    if entry.severity is not None:
        return int(clamp(round_half_up(entry.severity), low, high))

    secondary = entry.secondary_symptoms()
    if secondary:
        average = sum(secondary) / len(secondary)
        rescaled = low + average * (high - low) / policy.secondary_scale_max
        return int(clamp(round_half_up(rescaled), low, high))

    if entry.bristol is not None:
        distance = abs(entry.bristol - policy.bristol_ideal)
        return int(clamp(round_half_up(policy.bristol_base_score + distance), low, high))

    return policy.neutral_score


def confounder_weight(entry: LogEntry, policy: AnalysisPolicy = DEFAULT_POLICY) -> float:
    """
    How much a log day should count towards exposure attribution.

    Dense entries are trusted more than sparse ones. High stress and alcohol
    each halve the weight since either can explain symptoms on their own.
    """
    populated = entry.populated_field_count()
    weight = policy.sparse_weight
    for min_fields, completeness_weight in policy.completeness_weights:
        if populated >= min_fields:
            weight = completeness_weight
            break

    if entry.stress is not None and entry.stress >= policy.high_stress_threshold:
        weight *= policy.stress_penalty
    if entry.alcohol:
        weight *= policy.alcohol_penalty

    return weight
