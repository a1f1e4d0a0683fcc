from fastapi import FastAPI
import logging
import os

from app.api.error_handlers import register_error_handlers
from app.api.routes import router
from app.infra.redis_client import get_namespace

# Configure logging
logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="game-records-api", version="0.1.0")
app.include_router(router)
register_error_handlers(app)


@app.on_event("startup")
async def _startup() -> None:
    logger.info("game-records-api starting (namespace=%s)", get_namespace())


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "game-records-api", "version": "0.1.0"}


def run() -> None:
    """Console entry point: serve the app with uvicorn (HOST/PORT from the environment)."""

    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "8000")),
        log_level=os.environ.get("LOG_LEVEL", "INFO").lower(),
    )
