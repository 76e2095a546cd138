import logging
from urllib.parse import urlparse

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from gut_insights.api import analysis, auth

logger = logging.getLogger(__name__)

app = FastAPI(title="Gut Insights", version="0.1.0")


# =============================================================================
# CSRF Origin Validation Middleware
# =============================================================================


class CSRFOriginMiddleware(BaseHTTPMiddleware):
    """
    Validate Origin/Referer headers on state-changing requests to prevent CSRF.

    - POST, PUT, PATCH, DELETE must include a matching Origin or Referer header
    - GET, HEAD, OPTIONS are always allowed (safe methods)
    - Health check endpoints are exempt
    """

    SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}
    EXEMPT_PATHS = {"/health"}

    async def dispatch(self, request: Request, call_next):
        if request.method in self.SAFE_METHODS:
            return await call_next(request)

        if request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        expected_host = request.headers.get("host", "")

        # Origin takes precedence, Referer is the fallback
        source = request.headers.get("origin") or request.headers.get("referer")
        if not source:
            logger.warning(
                "CSRF missing origin/referer: method=%s, path=%s",
                request.method,
                request.url.path,
            )
            return JSONResponse(
                status_code=403,
                content={"detail": "Origin validation failed"},
            )

        source_host = urlparse(source).netloc
        if source_host != expected_host:
            logger.warning(
                "CSRF origin mismatch: source=%s, expected=%s, path=%s",
                source,
                expected_host,
                request.url.path,
            )
            return JSONResponse(
                status_code=403,
                content={"detail": "Origin validation failed"},
            )

        return await call_next(request)


app.add_middleware(CSRFOriginMiddleware)


@app.exception_handler(SQLAlchemyError)
async def data_store_exception_handler(request: Request, exc: SQLAlchemyError):
    """Upstream storage failures surface as a server error, never as partial data."""
    logger.error(
        "Data store failure on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Data store unavailable"})


# Include routers
app.include_router(auth.router)
app.include_router(analysis.router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
