import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from studyaid.config import get_settings
from studyaid.db.factory import make_database
from studyaid.middlewares import request_logging_middleware
from studyaid.routers import materials, notes, ping, profile, quizzes
from studyaid.services.gateway.factory import make_gateway_client

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan for the API.
    """
    logger.info("Starting StudyAid API...")

    app.state.settings = settings

    database = make_database()
    app.state.database = database
    logger.info("Database connected")

    app.state.gateway_client = make_gateway_client()
    logger.info(f"AI gateway client initialized: model={settings.ai_gateway_model}")

    logger.info("API ready")
    yield

    # Cleanup
    database.teardown()
    logger.info("API shutdown complete")


app = FastAPI(
    title="StudyAid",
    description="Turns study material into notes, flashcards and quizzes.",
    version=settings.app_version,
    lifespan=lifespan,
)

app.middleware("http")(request_logging_middleware)

app.include_router(ping.router, prefix=settings.api_v1_prefix)
app.include_router(materials.router, prefix=settings.api_v1_prefix)
app.include_router(quizzes.router, prefix=settings.api_v1_prefix)
app.include_router(notes.router, prefix=settings.api_v1_prefix)
app.include_router(profile.router, prefix=settings.api_v1_prefix)


if __name__ == "__main__":
    uvicorn.run(app, port=8000, host="0.0.0.0")
