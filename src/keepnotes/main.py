# Main application entry point
import asyncio
import contextlib
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import auth_router, health_router, notes_router, tags_router, users_router
from .config import get_settings
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .dependencies import get_core
from .middleware.errors import OutcomeFailure, outcome_failure_handler
from .rpc import router as rpc_router

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Starting Keep Notes application",
        extra={"version": __version__, "environment": settings.environment, "debug": settings.debug},
    )

    # load the snapshot now rather than on the first request
    core = get_core(settings)
    purge_task = asyncio.create_task(
        core.run_purge_loop(settings.revocation_purge_interval_seconds)
    )
    logger.info(
        "Revocation purge scheduled",
        extra={"interval_seconds": settings.revocation_purge_interval_seconds},
    )

    yield

    # Shutdown
    logger.info("Shutting down Keep Notes application")
    purge_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await purge_task


app = FastAPI(
    title=settings.app_name,
    description="Multi-tenant notes and tags API with REST and RPC front-ends",
    version=__version__,
    lifespan=lifespan,
)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(OutcomeFailure, outcome_failure_handler)

# Include routers
app.include_router(auth_router, prefix="/api")
app.include_router(notes_router, prefix="/api")
app.include_router(tags_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(health_router, prefix="/api")
app.include_router(rpc_router)


# Root endpoint
@app.get("/")
async def root():
    return {"message": "Keep Notes API"}


@app.get("/api/")
async def api_root():
    return {
        "message": "Keep Notes API",
        "version": __version__,
        "documentation": {"swagger_ui": "/docs", "redoc": "/redoc", "openapi_json": "/openapi.json"},
        "endpoints": {
            "authentication": "/api/auth/",
            "notes": "/api/notes/",
            "tags": "/api/tags/",
            "users": "/api/users/{id}",
            "health": "/api/health/",
            "rpc": "/rpc/keepapi.<Service>/<Method>",
        },
    }


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run("keepnotes.main:app", host=settings.host, port=settings.port, reload=settings.reload)


if __name__ == "__main__":
    run()
