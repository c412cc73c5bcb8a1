# app/main.py
"""
FastAPI application entry point.
Includes security middleware, error handlers, and all admin page routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from app.routers import auth, dashboard, vehicles, drivers, trips, maintenance, reports, health
from app.backend_client import get_backend, reset_backend
from app.config import settings
from app.errors import FleetError, ValidationError, BackendError
from app.utils.logger import get_logger
import secrets
import time

logger = get_logger(__name__)

# Reachable without X-API-Key: the login screen and the health probe
OPEN_PATHS = {
    "/api/v1/auth/login",
    "/api/v1/auth/demo",
    "/api/v1/health",
    "/docs",
    "/redoc",
    "/openapi.json",
}

app = FastAPI(
    title="Fleet Admin API",
    description="Vehicles, drivers, trips, maintenance, dashboards and CSV reports over a hosted data backend.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (admin frontend runs on a different origin) ────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Restrict to the admin frontend origin in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Response-Time-Ms"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Shared-key guard for the admin routes, enabled by setting API_KEY in .env.
    The key is read from the X-API-Key header or the api_key query parameter
    (CSV download links cannot carry headers).
    """
    def __init__(self, app, api_key: str):
        super().__init__(app)
        self.api_key = api_key

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS" or request.url.path in OPEN_PATHS:
            return await call_next(request)

        supplied = request.headers.get("X-API-Key") or request.query_params.get("api_key") or ""
        if not secrets.compare_digest(supplied.encode(), self.api_key.encode()):
            logger.warning(f"Rejected {request.method} {request.url.path}: bad or missing API key")
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware, api_key=settings.API_KEY)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def time_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration = round((time.perf_counter() - start) * 1000, 2)
    response.headers["X-Response-Time-Ms"] = str(duration)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Error Handlers ───────────────────────────────────────────────────────────
@app.exception_handler(FleetError)
async def fleet_error_handler(request: Request, exc: FleetError):
    status_code = exc.status_code
    content = {"detail": exc.message}
    if isinstance(exc, ValidationError):
        logger.info(f"Rejected input on {request.url.path}: {exc.message}")
        if exc.field:
            content["field"] = exc.field
    elif isinstance(exc, BackendError):
        logger.error(f"Backend failure on {request.url.path}: {exc.message}")
        # client errors reported by the backend (unique violations, bad filters) keep their status
        if type(exc) is BackendError and exc.backend_status and 400 <= exc.backend_status < 500:
            status_code = exc.backend_status
    else:
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(auth.router,        prefix="/api/v1", tags=["Login"])
app.include_router(dashboard.router,   prefix="/api/v1", tags=["Dashboard"])
app.include_router(vehicles.router,    prefix="/api/v1", tags=["Fleet"])
app.include_router(drivers.router,     prefix="/api/v1", tags=["Drivers"])
app.include_router(trips.router,       prefix="/api/v1", tags=["Trips"])
app.include_router(maintenance.router, prefix="/api/v1", tags=["Maintenance"])
app.include_router(reports.router,     prefix="/api/v1", tags=["Reports"])
app.include_router(health.router,      prefix="/api/v1", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Fleet Admin starting up...")
    backend = get_backend()
    if backend.mode == "local":
        from app.database import create_tables
        create_tables()
        logger.info("Local database tables ready")
    logger.info(f"Backend mode: {backend.mode}")
    logger.info(f"API key guard: {'on' if settings.API_KEY else 'off'}")
    logger.info(f"Listening on http://{settings.APP_HOST}:{settings.APP_PORT}")
    logger.info("API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Fleet Admin shutting down...")
    reset_backend()
