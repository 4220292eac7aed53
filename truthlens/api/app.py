"""FastAPI application for TruthLens.

Logging: structured JSON lines. Set LOG_FORMAT=pretty for development.
"""

# Configure structured logging BEFORE importing anything else
from truthlens.utils.logging import configure_logging, get_logger, log  # noqa: E402

configure_logging()

MODULE = "api"
logger = get_logger("api")

from contextlib import asynccontextmanager  # noqa: E402

from fastapi import FastAPI  # noqa: E402

from truthlens import __version__  # noqa: E402
from truthlens.api.deps import get_feed_service, get_verification_service  # noqa: E402
from truthlens.api.routes.feed import router as feed_router  # noqa: E402
from truthlens.api.routes.health import router as health_router  # noqa: E402
from truthlens.api.routes.verify import router as verify_router  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown."""
    configured = get_verification_service().configured and get_feed_service().configured
    if configured:
        log.info(logger, MODULE, "startup", "TruthLens API ready", version=__version__)
    else:
        log.warning(logger, MODULE, "startup", "GEMINI_API_KEY not set; feed and verify will return 503",
                    version=__version__)
    yield
    log.info(logger, MODULE, "shutdown", "Application shutdown complete")


app = FastAPI(
    title="TruthLens",
    description="Credibility-scored news feed and claim verification API",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(feed_router, prefix="/feed", tags=["feed"])
app.include_router(verify_router, prefix="/verify", tags=["verify"])
