"""Before/after comparison for user-declared food experiments."""
from typing import List, Optional, Sequence

from gut_insights.services.analysis.policy import AnalysisPolicy, DEFAULT_POLICY
from gut_insights.services.analysis.scoring import round_half_up, symptom_score
from gut_insights.services.analysis.types import Experiment, ExperimentResult, LogEntry


def evaluate_experiment(
    logs: Sequence[LogEntry],
    experiment: Experiment,
    policy: AnalysisPolicy = DEFAULT_POLICY,
) -> Optional[ExperimentResult]:
    """
    Compare mean symptom score before and after the experiment start date.

    Uses the raw score without confounder weighting. Returns None when either
    side of the split has no logs.
    """
    before = [symptom_score(log, policy) for log in logs if log.log_date < experiment.start_date]
    after = [symptom_score(log, policy) for log in logs if log.log_date >= experiment.start_date]

    if not before or not after:
        return None

    mean_before = sum(before) / len(before)
    mean_after = sum(after) / len(after)

    return ExperimentResult(
        identity=experiment.identity,
        start_date=experiment.start_date,
        end_date=experiment.end_date,
        avg_before=round_half_up(mean_before, 1),
        avg_after=round_half_up(mean_after, 1),
        change=round_half_up(mean_after - mean_before, 1),
        days_before=len(before),
        days_after=len(after),
    )


def evaluate(
    logs: Sequence[LogEntry],
    experiments: Sequence[Experiment],
    policy: AnalysisPolicy = DEFAULT_POLICY,
) -> List[ExperimentResult]:
    results = []
    for experiment in experiments:
        result = evaluate_experiment(logs, experiment, policy)
        if result is not None:
            results.append(result)
    return results
