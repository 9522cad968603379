"""Main entry point for venue-hours-server.

Startup sequence:
1. Initialize DI container (connects to Redis, seeds an empty store)
2. Compute the initial open/closed projection
3. Start the periodic status refresh job
4. Serve HTTP with FastAPI
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from venue_hours.config import Settings
from venue_hours.container import Container
from venue_hours.errors import StoreError
from venue_hours.routers import venue_router, auth_router, set_venue_handler
from venue_hours.middleware import PrometheusMiddleware
from venue_hours.metrics import (
    BACKGROUND_JOB_RUNS_TOTAL,
    BACKGROUND_JOB_DURATION_SECONDS,
    BACKGROUND_JOB_LAST_RUN_TIMESTAMP,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

STATUS_REFRESH_JOB_ID = "status_refresh"

# Global container and scheduler
container: Optional[Container] = None
scheduler: Optional[AsyncIOScheduler] = None


def run_status_refresh_job():
    """Background job: recompute which venues are open now.

    Open status moves with the clock even when no schedule changes, so the
    cached projection is rebuilt on a fixed cadence. Nothing is written.
    """
    job_name = STATUS_REFRESH_JOB_ID
    logger.debug("[Scheduler] Running StatusRefreshJob")
    start_time = time.perf_counter()
    try:
        container.status_projector.refresh()
        duration = time.perf_counter() - start_time
        BACKGROUND_JOB_DURATION_SECONDS.labels(job_name=job_name).observe(duration)
        BACKGROUND_JOB_RUNS_TOTAL.labels(job_name=job_name, status="success").inc()
        BACKGROUND_JOB_LAST_RUN_TIMESTAMP.labels(job_name=job_name).set_to_current_time()
    except StoreError as e:
        duration = time.perf_counter() - start_time
        BACKGROUND_JOB_DURATION_SECONDS.labels(job_name=job_name).observe(duration)
        BACKGROUND_JOB_RUNS_TOTAL.labels(job_name=job_name, status="error").inc()
        logger.error(f"[Scheduler] StatusRefreshJob failed: {e}")


def start_background_jobs(settings: Settings) -> AsyncIOScheduler:
    """Start the status refresh job using APScheduler."""
    global scheduler
    scheduler = AsyncIOScheduler()

    scheduler.add_job(
        run_status_refresh_job,
        trigger=IntervalTrigger(seconds=settings.status_refresh_seconds),
        id=STATUS_REFRESH_JOB_ID,
        name="Venue Status Refresh",
        replace_existing=True,
    )
    logger.info(
        f"[Scheduler] Scheduled status refresh every "
        f"{settings.status_refresh_seconds} seconds"
    )

    scheduler.start()
    logger.info("[Scheduler] Background jobs started")
    return scheduler


def startup_sequence(settings: Settings, app_container: Optional[Container] = None):
    """Build the container, wire the routers and start the refresh job."""
    global container

    logger.info("[Main] Starting startup sequence")

    logger.info("[Main] Initializing DI container")
    container = app_container or Container(settings)

    # Inject handler into routers (routes already registered at app creation)
    set_venue_handler(container.venue_handler)

    logger.info("[Main] Computing initial status projection")
    try:
        container.status_projector.refresh()
    except StoreError as e:
        logger.error(f"[Main] Initial status projection failed: {e}")

    start_background_jobs(settings)

    logger.info("[Main] Startup sequence completed")


def shutdown_sequence():
    """Clean up resources on shutdown."""
    global container, scheduler

    logger.info("[Main] Starting shutdown sequence")

    if scheduler:
        logger.info("[Main] Stopping scheduler")
        if scheduler.get_job(STATUS_REFRESH_JOB_ID):
            scheduler.remove_job(STATUS_REFRESH_JOB_ID)
        scheduler.shutdown(wait=False)
        scheduler = None
        logger.info("[Main] Scheduler stopped")

    if container:
        container.shutdown()
        container = None

    set_venue_handler(None)
    logger.info("[Main] Shutdown sequence completed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for startup and shutdown."""
    startup_sequence(app.state.settings, getattr(app.state, "container", None))
    yield
    shutdown_sequence()


def create_app(settings: Optional[Settings] = None, app_container: Optional[Container] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings (loaded from env/JSON when None)
        app_container: Pre-built container, used by tests
    """
    application = FastAPI(
        title="Venue Hours API",
        description="Venue opening hours and open/closed status",
        version="1.0.0",
        lifespan=lifespan,
    )
    application.state.settings = settings or Settings()
    application.state.container = app_container

    application.add_middleware(PrometheusMiddleware)
    application.include_router(auth_router)
    application.include_router(venue_router)

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed requests as 400 instead of FastAPI's default 422."""
        logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @application.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    @application.get("/metrics", response_class=PlainTextResponse)
    def metrics():
        """Prometheus metrics endpoint for scraping."""
        return PlainTextResponse(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST,
        )

    return application


settings = Settings()
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    logger.info("[Main] Starting venue-hours-server")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
