"""Test fixtures for Gut Insights."""

from tests.fixtures.mocks import (
    MockClaudeService,
    MockNarrativeGenerator,
    SerialDigestiveDataService,
)

__all__ = [
    "MockClaudeService",
    "MockNarrativeGenerator",
    "SerialDigestiveDataService",
]
