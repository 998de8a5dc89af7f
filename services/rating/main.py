"""
rating 서비스 단독 실행용
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from common.config import get_settings
from common.errors import register_exception_handlers
from common.logger import get_logger
from common.middleware import register_common_middleware
from services.rating.database import close_rating_db, open_rating_db
from services.rating.routers import api_router

logger = get_logger("rating_service")
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await open_rating_db(app, get_settings())
    try:
        yield
    finally:
        await close_rating_db(app)


app = FastAPI(title="Rating Service", lifespan=lifespan)

register_common_middleware(app, settings.cors_origins)
register_exception_handlers(app)

app.include_router(api_router.router)

logger.info("Rating Service initialized successfully")
