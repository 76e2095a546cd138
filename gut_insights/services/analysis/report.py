"""Report assembly: run the engine over one request's data and attach the narrative."""
import asyncio
import logging
from datetime import date
from typing import Optional, Sequence

from gut_insights.services.analysis.correlator import correlate
from gut_insights.services.analysis.experiments import evaluate
from gut_insights.services.analysis.narrative import (
    NarrativeGenerator,
    NullNarrativeGenerator,
)
from gut_insights.services.analysis.policy import AnalysisPolicy, DEFAULT_POLICY
from gut_insights.services.analysis.ranker import rank
from gut_insights.services.analysis.types import (
    AnalysisOutcome,
    Experiment,
    ExposureEvent,
    LogEntry,
    Report,
)


logger = logging.getLogger(__name__)


class ReportAssembler:
    """
    Compose correlator, ranker and experiment evaluator into one report.

    Holds no per-request state, so a single instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        policy: AnalysisPolicy = DEFAULT_POLICY,
        narrative_generator: Optional[NarrativeGenerator] = None,
    ):
        self.policy = policy
        self.narrative_generator = narrative_generator or NullNarrativeGenerator()

    def insufficient_data_message(self) -> str:
        return (
            f"Se necesitan al menos {self.policy.min_logs_for_scoring} registros "
            f"digestivos para generar un análisis."
        )

    def build_report(
        self,
        logs: Sequence[LogEntry],
        exposures: Sequence[ExposureEvent],
        experiments: Sequence[Experiment],
        period_start: date,
        period_end: date,
    ) -> Report:
        """Run scoring, correlation, ranking and experiment evaluation."""
        correlation = correlate(logs, exposures, self.policy)
        ranked = rank(correlation, self.policy)
        experiment_results = evaluate(logs, experiments, self.policy)

        return Report(
            top_suspects=ranked.suspects,
            safe_foods=ranked.safe,
            experiments=experiment_results,
            total_logs=len(logs),
            period_start=period_start,
            period_end=period_end,
        )

    async def assemble(
        self,
        logs: Sequence[LogEntry],
        exposures: Sequence[ExposureEvent],
        experiments: Sequence[Experiment],
        period_start: date,
        period_end: date,
    ) -> AnalysisOutcome:
        """
        Build the full outcome for one request.

        Returns scoring=None with an explanatory message when there are too few
        logs to say anything. Otherwise the report is always returned; the
        narrative is attached only if it arrives in time.
        """
        if len(logs) < self.policy.min_logs_for_scoring:
            return AnalysisOutcome(scoring=None, analysis=self.insufficient_data_message())

        report = self.build_report(logs, exposures, experiments, period_start, period_end)

        logger.info(
            "Digestive report built: %d logs, %d exposures, %d suspects, %d safe, %d experiments",
            report.total_logs,
            len(exposures),
            len(report.top_suspects),
            len(report.safe_foods),
            len(report.experiments),
        )

        analysis = await self.generate_narrative(logs, report)
        return AnalysisOutcome(scoring=report, analysis=analysis)

    async def generate_narrative(
        self, logs: Sequence[LogEntry], report: Report
    ) -> Optional[str]:
        """Best-effort narrative. Any failure or timeout yields None."""
        if len(logs) < self.policy.min_logs_for_narrative:
            return None
        if not self.narrative_generator.available:
            return None

        try:
            return await asyncio.wait_for(
                self.narrative_generator.summarize(logs, report),
                timeout=self.policy.narrative_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Narrative generation timed out after %.1fs",
                self.policy.narrative_timeout_seconds,
            )
        except Exception as e:
            logger.warning("Narrative generation failed: %s", e, exc_info=True)
        return None
