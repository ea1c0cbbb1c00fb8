"""
Payments Admin — FastAPI Application Entry Point

Aggregates the auth and payments routers, configures middleware and error
handlers, and initializes the database on startup.
"""
import logging
import time
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import make_url

from app.config import get_settings
from app.database import SessionLocal, init_db
from app.errors import AppError, AuthenticationFailed, RateLimited, ValidationFailed
from app.logging_config import setup_logging
from app.routes import auth_router, payments_router
from app.schemas.schemas import HealthResponse
from app.services.auth_service import AuthService

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

# ─── Application Instance ───────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Admin API for payment records: sign in, then list, search, "
        "edit and delete payments made by users of the product."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# ─── Startup ─────────────────────────────────────────────────────────
BOOT_TIME = time.time()


@app.on_event("startup")
def on_startup():
    """Initialize database tables, seed the bootstrap admin, log boot info."""
    init_db()

    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        db = SessionLocal()
        try:
            AuthService.ensure_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, settings.ADMIN_NAME)
        finally:
            db.close()

    boot_msg = (
        f"\n{'='*60}\n"
        f"  {settings.APP_NAME} v{settings.APP_VERSION}\n"
        f"  TIME: {datetime.now().isoformat()}\n"
        f"  DATABASE: {make_url(settings.DATABASE_URL).render_as_string(hide_password=True)}\n"
        f"  INR PER USD: {settings.INR_PER_USD}\n"
        f"  DEBUG: {settings.DEBUG}\n"
        f"{'='*60}"
    )
    logger.info(boot_msg)


# ─── Middleware ──────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with timing."""
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 1)

    if request.url.path.startswith("/api"):
        logger.info("%s %s -> %s (%sms)", request.method, request.url.path, response.status_code, duration)

    return response


# ─── Error Handlers ──────────────────────────────────────────────────
def _sanitize_validation_errors(errors) -> list:
    """Validation errors without echoed input; ctx reduced to plain values."""
    safe = []
    for err in errors:
        sanitized = {k: v for k, v in err.items() if k not in ("input", "ctx", "url")}
        sanitized["loc"] = [str(part) for part in err.get("loc", ())]
        ctx = err.get("ctx")
        if isinstance(ctx, dict):
            sanitized["ctx"] = {
                k: v if isinstance(v, (str, int, float, bool, type(None))) else str(v)
                for k, v in ctx.items()
            }
        safe.append(sanitized)
    return safe


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query params answer 422 in the common error shape."""
    details = _sanitize_validation_errors(exc.errors())
    logger.warning("Validation failed on %s (%d errors)", request.url.path, len(details))
    error = ValidationFailed("Request validation failed", details={"errors": details})
    return JSONResponse(status_code=422, content=error.to_dict(include_details=True))


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    headers = None
    if isinstance(exc, AuthenticationFailed):
        headers = {"WWW-Authenticate": "Bearer"}
    elif isinstance(exc, RateLimited):
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(
        status_code=exc.status,
        content=exc.to_dict(include_details=settings.DEBUG),
        headers=headers,
    )


# ─── API Routers ─────────────────────────────────────────────────────
app.include_router(auth_router)
app.include_router(payments_router)


@app.get("/health", tags=["Health"], response_model=HealthResponse)
def health():
    """Health check including database reachability."""
    db_ok = False
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except Exception as exc:
        logger.warning("Health check could not reach the database: %s", exc)
    finally:
        db.close()

    return HealthResponse(
        status="healthy" if db_ok else "degraded",
        database="connected" if db_ok else "disconnected",
        version=settings.APP_VERSION,
        uptime_seconds=round(time.time() - BOOT_TIME, 1),
    )
