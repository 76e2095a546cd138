"""
Digestive correlation & scoring engine.

Turns symptom logs, food/supplement exposures and declared experiments into
a ranked suspect list, a safe-food list and before/after experiment effects.

Usage:
    from gut_insights.services.analysis import ReportAssembler

    assembler = ReportAssembler(AnalysisPolicy.from_settings(), get_narrative_generator())
    outcome = await assembler.assemble(logs, exposures, experiments, since, today)
"""
from gut_insights.services.analysis.correlator import correlate, is_exposed
from gut_insights.services.analysis.experiments import evaluate, evaluate_experiment
from gut_insights.services.analysis.narrative import (
    ClaudeNarrativeGenerator,
    NarrativeGenerator,
    NullNarrativeGenerator,
    get_narrative_generator,
)
from gut_insights.services.analysis.policy import AnalysisPolicy, DEFAULT_POLICY
from gut_insights.services.analysis.ranker import rank, score_exposures
from gut_insights.services.analysis.report import ReportAssembler
from gut_insights.services.analysis.scoring import confounder_weight, symptom_score
from gut_insights.services.analysis.types import (
    AnalysisOutcome,
    CorrelationResult,
    Experiment,
    ExperimentResult,
    ExposureEvent,
    ExposureKind,
    LogEntry,
    RankedExposures,
    Report,
    SafeExposure,
    ScoredExposure,
)


def get_report_assembler() -> ReportAssembler:
    """FastAPI dependency: assembler wired from application settings."""
    return ReportAssembler(AnalysisPolicy.from_settings(), get_narrative_generator())


__all__ = [
    "AnalysisOutcome",
    "AnalysisPolicy",
    "ClaudeNarrativeGenerator",
    "CorrelationResult",
    "DEFAULT_POLICY",
    "Experiment",
    "ExperimentResult",
    "ExposureEvent",
    "ExposureKind",
    "LogEntry",
    "NarrativeGenerator",
    "NullNarrativeGenerator",
    "RankedExposures",
    "Report",
    "ReportAssembler",
    "SafeExposure",
    "ScoredExposure",
    "confounder_weight",
    "correlate",
    "evaluate",
    "evaluate_experiment",
    "get_narrative_generator",
    "get_report_assembler",
    "is_exposed",
    "rank",
    "score_exposures",
    "symptom_score",
]
