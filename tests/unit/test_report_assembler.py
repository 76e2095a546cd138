"""
Unit tests for ReportAssembler.

Tests the full engine pass end to end on in-memory data:
- Suspect and safe-food scenarios
- Experiment effects in the report
- Insufficient-data short circuit
- Best-effort narrative (failure, timeout, log floor, unavailable backend)
"""
import asyncio
import logging
from datetime import date, timedelta

import pytest

from gut_insights.services.analysis import (
    AnalysisPolicy,
    Experiment,
    ExposureEvent,
    ExposureKind,
    LogEntry,
    ReportAssembler,
)
from tests.fixtures.mocks import MockNarrativeGenerator


BASE = date(2025, 1, 1)
PERIOD_END = date(2025, 1, 31)


def day(offset: int) -> date:
    return BASE + timedelta(days=offset)


def dense_log(offset: int, severity: int) -> LogEntry:
    return LogEntry.build(day(offset), severity=severity, bloating=2, pain=1, bristol=4)


def meal(name: str, offset: int) -> ExposureEvent:
    return ExposureEvent(kind=ExposureKind.FOOD, identity=name, occurred_on=day(offset))


def curry_scenario():
    """Five bad days each within 72h of a curry, one calm day far from it."""
    logs = [
        dense_log(1, 5),
        dense_log(2, 4),
        dense_log(4, 5),
        dense_log(5, 4),
        dense_log(6, 5),
        dense_log(12, 1),
    ]
    exposures = [meal("Curry de garbanzos", 0), meal("Curry de garbanzos", 3)]
    return logs, exposures


class TestScoringReport:
    """Tests for the structured report."""

    @pytest.mark.asyncio
    async def test_recurring_trigger_is_top_suspect(self, assembler):
        logs, exposures = curry_scenario()

        outcome = await assembler.assemble(logs, exposures, [], BASE, PERIOD_END)

        top = outcome.scoring.top_suspects[0]
        assert top.identity == "Curry de garbanzos"
        assert top.kind is ExposureKind.FOOD
        assert top.occurrences == 5
        assert 4.5 <= top.avg_score <= 5
        assert top.example_dates == (day(1), day(2), day(4))

    @pytest.mark.asyncio
    async def test_repeatedly_calm_food_is_safe(self, assembler):
        logs = [dense_log(o, 1) for o in (20, 25, 30)]
        exposures = [meal("Avena", o) for o in (20, 25, 30)]

        outcome = await assembler.assemble(logs, exposures, [], BASE, PERIOD_END)

        safe = [s.as_payload() for s in outcome.scoring.safe_foods]
        assert safe == [{"name": "Avena", "safeDays": 3}]

    @pytest.mark.asyncio
    async def test_experiment_effect(self, assembler):
        start = date(2025, 1, 15)
        logs = [LogEntry.build(start - timedelta(days=i), severity=4) for i in range(1, 5)]
        logs += [LogEntry.build(start + timedelta(days=i), severity=2) for i in range(4)]

        outcome = await assembler.assemble(
            logs, [], [Experiment("Garbanzos", start)], BASE, PERIOD_END
        )

        result = outcome.scoring.experiments[0]
        assert result.change == -2.0
        assert result.days_before == 4
        assert result.days_after == 4

    @pytest.mark.asyncio
    async def test_report_payload(self, assembler):
        logs, exposures = curry_scenario()

        outcome = await assembler.assemble(logs, exposures, [], BASE, PERIOD_END)
        payload = outcome.as_payload()

        scoring = payload["scoring"]
        assert scoring["totalLogs"] == 6
        assert scoring["period"] == "2025-01-01 a 2025-01-31"
        assert scoring["topSuspects"][0]["name"] == "Curry de garbanzos"
        assert scoring["experiments"] == []
        assert set(scoring) == {"topSuspects", "safeFoods", "experiments", "totalLogs", "period"}

    @pytest.mark.asyncio
    async def test_no_exposures_gives_empty_lists(self, assembler):
        logs = [dense_log(o, 3) for o in range(3)]

        outcome = await assembler.assemble(logs, [], [], BASE, PERIOD_END)

        assert outcome.scoring.top_suspects == []
        assert outcome.scoring.safe_foods == []
        assert outcome.scoring.total_logs == 3


class TestInsufficientData:
    """Tests for the minimum-log short circuit."""

    @pytest.mark.asyncio
    async def test_two_logs_returns_message(self, assembler, mock_narrative):
        logs = [dense_log(1, 5), dense_log(2, 4)]

        outcome = await assembler.assemble(logs, [meal("Curry", 0)], [], BASE, PERIOD_END)

        assert outcome.as_payload() == {
            "scoring": None,
            "analysis": "Se necesitan al menos 3 registros digestivos para generar un análisis.",
        }
        assert mock_narrative.calls == []

    @pytest.mark.asyncio
    async def test_zero_logs(self, assembler):
        outcome = await assembler.assemble([], [], [], BASE, PERIOD_END)

        assert outcome.scoring is None

    @pytest.mark.asyncio
    async def test_exactly_three_logs_scores(self, assembler):
        logs = [dense_log(o, 3) for o in range(3)]

        outcome = await assembler.assemble(logs, [], [], BASE, PERIOD_END)

        assert outcome.scoring is not None

    def test_message_follows_policy(self):
        assembler = ReportAssembler(AnalysisPolicy().with_overrides(min_logs_for_scoring=7))

        assert "al menos 7 registros" in assembler.insufficient_data_message()


class TestNarrative:
    """Tests for the optional narrative."""

    @pytest.mark.asyncio
    async def test_narrative_attached(self, assembler, mock_narrative):
        logs, exposures = curry_scenario()

        outcome = await assembler.assemble(logs, exposures, [], BASE, PERIOD_END)

        assert outcome.analysis == "Narrativa de prueba."
        assert len(mock_narrative.calls) == 1
        assert mock_narrative.calls[0]["report"] is outcome.scoring

    @pytest.mark.asyncio
    async def test_failure_keeps_scoring(self, assembler, mock_narrative, caplog):
        mock_narrative.set_error(RuntimeError("upstream exploded"))
        logs, exposures = curry_scenario()

        with caplog.at_level(logging.WARNING, logger="gut_insights.services.analysis.report"):
            outcome = await assembler.assemble(logs, exposures, [], BASE, PERIOD_END)

        assert outcome.scoring is not None
        assert outcome.scoring.top_suspects[0].identity == "Curry de garbanzos"
        assert outcome.analysis is None
        assert "Narrative generation failed" in caplog.text

    @pytest.mark.asyncio
    async def test_timeout_keeps_scoring(self, mock_narrative, caplog):
        mock_narrative.set_delay(1.0)
        assembler = ReportAssembler(
            AnalysisPolicy(narrative_timeout_seconds=0.05), mock_narrative
        )
        logs, exposures = curry_scenario()

        with caplog.at_level(logging.WARNING, logger="gut_insights.services.analysis.report"):
            outcome = await assembler.assemble(logs, exposures, [], BASE, PERIOD_END)

        assert outcome.scoring is not None
        assert outcome.analysis is None
        assert "timed out" in caplog.text

    @pytest.mark.asyncio
    async def test_too_few_logs_for_narrative(self, assembler, mock_narrative):
        logs = [dense_log(o, 3) for o in range(4)]

        outcome = await assembler.assemble(logs, [], [], BASE, PERIOD_END)

        assert outcome.scoring is not None
        assert outcome.analysis is None
        assert mock_narrative.calls == []

    @pytest.mark.asyncio
    async def test_unavailable_generator_skipped(self, assembler, mock_narrative):
        mock_narrative.set_available(False)
        logs, exposures = curry_scenario()

        outcome = await assembler.assemble(logs, exposures, [], BASE, PERIOD_END)

        assert outcome.analysis is None
        assert mock_narrative.calls == []

    @pytest.mark.asyncio
    async def test_default_generator_produces_no_narrative(self):
        logs, exposures = curry_scenario()

        outcome = await ReportAssembler().assemble(logs, exposures, [], BASE, PERIOD_END)

        assert outcome.scoring is not None
        assert outcome.analysis is None

    @pytest.mark.asyncio
    async def test_concurrent_requests_do_not_share_state(self, assembler):
        curry_logs, curry_exposures = curry_scenario()
        calm_logs = [dense_log(o, 1) for o in (20, 25, 30)]
        calm_exposures = [meal("Avena", o) for o in (20, 25, 30)]

        first, second = await asyncio.gather(
            assembler.assemble(curry_logs, curry_exposures, [], BASE, PERIOD_END),
            assembler.assemble(calm_logs, calm_exposures, [], BASE, PERIOD_END),
        )

        assert first.scoring.top_suspects[0].identity == "Curry de garbanzos"
        assert [s.identity for s in second.scoring.safe_foods] == ["Avena"]
        assert first.scoring.safe_foods == []
