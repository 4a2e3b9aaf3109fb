import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from drawguard.api.deps import get_integrity_verifier, get_settings, load_configured_rules

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules on startup (fail-fast)
    try:
        load_configured_rules(settings.rules_path)
        logger.info("Rules loaded from %s", settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)

    yield

    get_integrity_verifier().shutdown()


app = FastAPI(
    title="Drawguard API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from drawguard.api.routes import drawings, imports  # noqa: E402

app.include_router(drawings.router, prefix="/api/drawings", tags=["Drawings"])
app.include_router(imports.router, prefix="/api/import", tags=["Import"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Liveness check, answered while imports are being verified."""
    return {"status": "ok"}
