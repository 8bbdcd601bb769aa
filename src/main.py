"""FastAPI application entrypoint."""

import random
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.api.game import router as game_router
from src.api.health import router as health_router
from src.config import settings
from src.core.activity.catalog import ActivityCatalog
from src.core.event_bus import EventBus, log_event
from src.core.logging import get_logger, setup_logging
from src.db.database import engine as db_engine
from src.db.models import Base

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # DB 테이블 생성
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    # 활동 카탈로그 로드
    logger.info("Loading activity catalog...")
    catalog = ActivityCatalog()
    count = catalog.load_from_json(settings.ACTIVITY_CATALOG_PATH)
    app.state.activity_catalog = catalog
    logger.info(f"Activity catalog loaded ({count} activities).")

    # 앱 단위 공유 객체
    app.state.event_bus = EventBus()
    app.state.event_bus.subscribe_all(log_event)
    app.state.rng = random.Random(settings.RNG_SEED)
    if settings.RNG_SEED is not None:
        logger.info(f"RNG seeded: {settings.RNG_SEED}")

    yield

    # 종료 시 정리
    logger.info("Shutting down...")
    app.state.event_bus.clear()


app = FastAPI(title="Life Sim Engine", lifespan=lifespan)

app.include_router(health_router)
app.include_router(game_router)
