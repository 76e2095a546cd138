"""
Narrative generator capability injected into the report assembler.

The assembler only needs summarize(); production wires in the Claude-backed
implementation, tests and unconfigured deployments use the null one.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from gut_insights.config import settings
from gut_insights.services.ai_service import ClaudeService
from gut_insights.services.analysis.types import LogEntry, Report
from gut_insights.services.prompts import build_narrative_user_message


class NarrativeGenerator(ABC):
    """Turns a finished report into free text. Failures are the caller's to absorb."""

    @property
    def available(self) -> bool:
        """False when the generator cannot run at all (e.g. no credential)."""
        return True

    @abstractmethod
    async def summarize(self, logs: Sequence[LogEntry], report: Report) -> Optional[str]:
        pass


class NullNarrativeGenerator(NarrativeGenerator):
    """Generator used when no narrative backend is configured."""

    @property
    def available(self) -> bool:
        return False

    async def summarize(self, logs: Sequence[LogEntry], report: Report) -> Optional[str]:
        return None


class ClaudeNarrativeGenerator(NarrativeGenerator):
    """Narrative backed by ClaudeService. Builds the client on first use."""

    def __init__(self, claude_service=None):
        self._claude_service = claude_service

    @property
    def claude_service(self):
        if self._claude_service is None:
            self._claude_service = ClaudeService()
        return self._claude_service

    @property
    def available(self) -> bool:
        if self._claude_service is not None:
            return self._claude_service.is_configured
        return bool(settings.anthropic_api_key)

    async def summarize(self, logs: Sequence[LogEntry], report: Report) -> Optional[str]:
        return await self.claude_service.summarize_digestive_report(
            build_narrative_user_message(logs, report)
        )


# Shared across requests so the Anthropic client is built once per process
claude_narrative_generator = ClaudeNarrativeGenerator()


def get_narrative_generator() -> NarrativeGenerator:
    """Configured generator: Claude when an API key is set, null otherwise."""
    if claude_narrative_generator.available:
        return claude_narrative_generator
    return NullNarrativeGenerator()
