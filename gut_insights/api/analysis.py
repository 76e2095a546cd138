"""Digestive analysis endpoint: suspects, safe foods and experiment effects."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError

from gut_insights.config import settings
from gut_insights.models.user import User
from gut_insights.services.analysis import (
    AnalysisOutcome,
    ReportAssembler,
    get_report_assembler,
)
from gut_insights.services.auth.dependencies import get_current_user
from gut_insights.services.digestive_data_service import (
    DigestiveDataService,
    get_digestive_data_service,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/digestive", tags=["digestive"])


class AnalysisRequest(BaseModel):
    """Request body for running the digestive analysis."""

    days: Optional[int] = None  # Defaults to settings.analysis_default_lookback_days


def parse_lookback_days(payload: Any) -> int:
    """
    Lookback window in days from a raw JSON payload.

    Anything unusable (missing, non-numeric, non-positive, not an object)
    falls back to the default; oversized windows are capped.
    """
    default = settings.analysis_default_lookback_days
    if not isinstance(payload, dict):
        return default

    try:
        days = AnalysisRequest.model_validate(payload).days
    except ValidationError:
        logger.info("Invalid lookback window %r, using default", payload.get("days"))
        return default

    if days is None or days <= 0:
        return default
    return min(days, settings.analysis_max_lookback_days)


async def analyze_lookback(
    user_id: UUID,
    days: int,
    data_service: DigestiveDataService,
    assembler: ReportAssembler,
) -> AnalysisOutcome:
    """Load the last `days` days of the user's data and assemble the report."""
    today = datetime.now(timezone.utc).date()
    since = today - timedelta(days=days)

    inputs = await data_service.load(user_id, since)

    return await assembler.assemble(
        inputs.logs,
        inputs.exposures,
        inputs.experiments,
        period_start=since,
        period_end=today,
    )


@router.post("/analysis")
async def run_analysis(
    request: Request,
    user: User = Depends(get_current_user),
    data_service: DigestiveDataService = Depends(get_digestive_data_service),
    assembler: ReportAssembler = Depends(get_report_assembler),
):
    """
    Score the user's recent digestive logs against their exposures.

    Returns:
        JSON with "scoring" (null when there are too few logs) and
        "analysis" (narrative text, explanatory message, or null)
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    days = parse_lookback_days(payload)
    outcome = await analyze_lookback(user.id, days, data_service, assembler)
    return outcome.as_payload()
