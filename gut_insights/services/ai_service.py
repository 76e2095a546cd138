"""
Claude AI integration for the optional narrative summary of a digestive report.

The scoring engine never depends on this service; its output is attached to
the report when available and dropped otherwise.
"""

import logging

from anthropic import AsyncAnthropic
import anthropic
import httpx

from gut_insights.config import settings
from gut_insights.services.prompts import DIGESTIVE_NARRATIVE_SYSTEM_PROMPT


logger = logging.getLogger(__name__)


class ClaudeService:
    """Thin async wrapper around the Anthropic messages API."""

    def __init__(self):
        timeout = httpx.Timeout(
            timeout=settings.anthropic_timeout,
            connect=settings.anthropic_connect_timeout,
        )
        # Single attempt: failures degrade to "no narrative" instead of retrying
        self.client = AsyncAnthropic(
            api_key=settings.anthropic_api_key, timeout=timeout, max_retries=0
        )
        self.narrative_model = settings.narrative_model

    @property
    def is_configured(self) -> bool:
        return bool(settings.anthropic_api_key)

    # =========================================================================
    # DIGESTIVE REPORT NARRATIVE
    # =========================================================================

    async def summarize_digestive_report(self, user_message: str) -> str:
        """
        Generate a free-text narrative from formatted logs and scoring context.

        Args:
            user_message: Prompt body built by prompts.build_narrative_user_message

        Returns:
            The narrative text

        Raises:
            ServiceUnavailableError: AI service temporarily down
            RateLimitError: Too many requests
            ValueError: Invalid response or request error
        """
        try:
            response = await self.client.messages.create(
                model=self.narrative_model,
                max_tokens=settings.narrative_max_tokens,
                system=DIGESTIVE_NARRATIVE_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": user_message}],
            )
        except anthropic.APIConnectionError as e:
            raise ServiceUnavailableError("AI service temporarily unavailable") from e
        except anthropic.RateLimitError as e:
            raise RateLimitError(
                "Too many requests, please try again in 1 minute"
            ) from e
        except anthropic.APIStatusError as e:
            if e.status_code >= 500:
                raise ServiceUnavailableError("AI service error") from e
            raise ValueError(f"Request error: {e.message}") from e

        narrative = ""
        for block in response.content:
            if hasattr(block, "text"):
                narrative += block.text

        narrative = narrative.strip()
        if not narrative:
            raise ValueError("No text content in AI response")

        logger.info(
            "Narrative generated with %s (%d chars)", self.narrative_model, len(narrative)
        )
        return narrative


# =============================================================================
# CUSTOM EXCEPTIONS
# =============================================================================


class ServiceUnavailableError(Exception):
    """AI service is temporarily unavailable."""

    pass


class RateLimitError(Exception):
    """Rate limit exceeded."""

    pass
