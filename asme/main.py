"""FastAPI application entry point."""
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from asme.core.config import settings
from asme.core.errors import ExternalServiceError
from asme.core.logging_config import configure_logging
from asme.core.structured_logging import build_log_context
from asme.db.session import engine

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

if settings.SENTRY_DSN and settings.ENV != "dev":
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,  # Contact forms and case data carry PII
    )
    logger.info("Sentry initialized for error tracking")

# ============================================================================
# Rate Limiting
# ============================================================================

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from asme.core.rate_limit import limiter


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="ASME API",
    description="Marketing site content, booking and the law-firm CRM",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware - must be added before routers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,  # Required for cookies
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    expose_headers=["X-Request-ID", "Content-Disposition"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag each request with an id and log method, route, status and timing."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    request.state.request_id = request_id
    started = time.perf_counter()

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    context = build_log_context(
        user_id=getattr(request.state, "user_id", None),
        request_id=request_id,
        route=request.url.path,
        method=request.method,
        status_code=response.status_code,
        duration_ms=(time.perf_counter() - started) * 1000,
    )
    logger.info("request completed", extra=context)
    return response


# ============================================================================
# Error handlers
# ============================================================================

def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed fields answer 400 with a single message."""
    return JSONResponse(status_code=400, content={"detail": _validation_message(exc)})


@app.exception_handler(ExternalServiceError)
async def external_service_exception_handler(request: Request, exc: ExternalServiceError):
    logger.warning("%s service error: %s", exc.service or "external", exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last resort: log with request context and answer a generic 500."""
    context = build_log_context(
        user_id=getattr(request.state, "user_id", None),
        request_id=getattr(request.state, "request_id", None),
        route=request.url.path,
        method=request.method,
    )
    logger.exception("Unhandled error", extra=context)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ============================================================================
# Routers
# ============================================================================

from asme.routers import (
    appointments,
    auth,
    blogs,
    campaigns,
    cases,
    clients,
    contact,
    gallery,
    hearings,
    pipc,
    uploads,
)

# Auth router (always mounted)
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])

# Public site: booking requests, contact form, content feeds
app.include_router(appointments.router, prefix="/api/appointments", tags=["appointments"])
app.include_router(contact.router, prefix="/api/contact", tags=["contact"])
app.include_router(blogs.router, prefix="/api/blogs", tags=["blogs"])
app.include_router(blogs.legal_router, prefix="/api/legal-blogs", tags=["legal-blogs"])
app.include_router(gallery.router, prefix="/api/gallery", tags=["gallery"])
app.include_router(gallery.team_router, prefix="/api/team", tags=["team"])

# Dashboard content management
app.include_router(gallery.service_cards_router, prefix="/api/service-cards", tags=["service-cards"])
app.include_router(uploads.router, prefix="/api", tags=["uploads"])

# Law-firm case management
app.include_router(cases.router, prefix="/api/casos", tags=["cases"])
app.include_router(hearings.router, prefix="/api", tags=["hearings"])

# CRM and email campaigns
app.include_router(clients.router, prefix="/api/clients", tags=["clients"])
app.include_router(campaigns.router, prefix="/api/campaigns", tags=["campaigns"])

# Civil protection programs
app.include_router(pipc.router, prefix="/api/pipc", tags=["pipc"])


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}
