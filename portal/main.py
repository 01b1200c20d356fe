# portal/main.py
"""
FastAPI application entry point.
Includes CORS, request timing, global error handlers, and all routers.
Every failure is rendered as {"message": str}.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from portal.routers import admin, passcodes, events, announce, ratings, health
from portal.config import settings
from portal.errors import ExternalDependencyError, PortalError
from portal.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Family Events Portal API",
    description="Passcode-gated event wall and admin dashboard backed by Supabase.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ─────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Error Handlers ───────────────────────────────────────────────────────────
# Client-facing messages for store/provider failures; details stay in the log.
DEPENDENCY_FAILURE_MESSAGES = {
    ("POST", "/api/admin/reset"): "Failed to reset admin password",
    ("POST", "/api/admin/verify-otp"): "Failed to update admin password",
    ("POST", "/api/admin/login"): "Admin login failed",
    ("GET", "/api/passcodes"): "Failed to fetch passcodes",
    ("POST", "/api/passcodes"): "Failed to save passcode",
    ("DELETE", "/api/passcodes/{passcode}"): "Failed to delete passcode",
    ("POST", "/api/passcode/login"): "Passcode login failed",
    ("GET", "/api/events"): "Failed to fetch events",
    ("POST", "/api/events"): "Failed to create event",
    ("DELETE", "/api/events/{event_id}"): "Failed to delete event",
    ("POST", "/api/announce"): "Failed to send announcement",
    ("POST", "/api/rate"): "Failed to record rating",
}


def _message(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    if isinstance(exc, ExternalDependencyError):
        logger.error(f"Dependency failure on {request.method} {request.url.path}: {exc}")
        route = request.scope.get("route")
        key = (request.method, getattr(route, "path", request.url.path))
        return _message(DEPENDENCY_FAILURE_MESSAGES.get(key, "External service error"),
                        exc.status_code)
    return _message(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return _message(detail, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _message(str(exc.detail), exc.status_code)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return _message("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(admin.router,     prefix="/api", tags=["Admin"])
app.include_router(passcodes.router, prefix="/api", tags=["Passcodes"])
app.include_router(events.router,    prefix="/api", tags=["Events"])
app.include_router(announce.router,  prefix="/api", tags=["Announcements"])
app.include_router(ratings.router,   prefix="/api", tags=["Ratings"])
app.include_router(health.router,    prefix="/api", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Family portal starting up...")
    if not settings.store_configured:
        logger.warning("SUPABASE_URL / SUPABASE_ANON_KEY not set: store calls will fail")
    if not settings.ADMIN_PASSWORD_HASH:
        logger.warning("ADMIN_PASSWORD_HASH not set: admin login disabled until reset")
    if settings.SESSION_SECRET == "change-me":
        logger.warning("SESSION_SECRET is the default: set it in production")
    logger.info(
        f"Providers: email={settings.email_enabled} sms={settings.sms_enabled} "
        f"analytics={settings.analytics_enabled}"
    )
    logger.info("API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Family portal shutting down...")
