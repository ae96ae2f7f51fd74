# guardiao/main.py
"""
FastAPI application entry point.
Includes security middleware, global error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from guardiao.routers import access_control, occurrences, suggestions, parking, missions, health
from guardiao.database import create_tables
from guardiao.config import settings
from guardiao.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Guardião Base Security API",
    description="Gate access control, occurrence dispatch, parking, missions and suggestions.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (web frontend is served from another origin) ───────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Restrict to the frontend origin in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional shared-secret check between the frontend gateway and this API.
    Public parking requests and the health check stay open.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}

    async def dispatch(self, request: Request, call_next):
        is_public_post = request.url.path == "/api/v1/parking-requests" and request.method == "POST"
        if request.url.path in self.open_paths or is_public_post or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(access_control.router, prefix="/api/v1", tags=["🚧 Access Control"])
app.include_router(occurrences.router,    prefix="/api/v1", tags=["🚨 Occurrences"])
app.include_router(parking.router,        prefix="/api/v1", tags=["🅿️  Parking Requests"])
app.include_router(missions.router,       prefix="/api/v1", tags=["📋 Mission Orders"])
app.include_router(suggestions.router,    prefix="/api/v1", tags=["💬 Suggestions"])
app.include_router(health.router,         prefix="/api/v1", tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 Guardião backend starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    logger.info(f"🤖 AI analysis: {'enabled (' + settings.LLM_MODEL + ')' if settings.GOOGLE_API_KEY else 'disabled'}")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 Guardião backend shutting down...")
