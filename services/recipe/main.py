"""
recipe 서비스 단독 실행용 (비동기 엔진 기반)
- lifespan 에서 레시피 DB 커넥션 풀 생성/반환
- 업로드된 레시피 이미지는 settings.image_url_prefix 경로로 정적 서빙
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from common.config import get_settings
from common.errors import register_exception_handlers
from common.logger import get_logger
from common.middleware import register_common_middleware
from common.static import mount_upload_dir
from services.recipe.database import close_recipe_db, open_recipe_db
from services.recipe.routers import api_router

logger = get_logger("recipe_service")
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    current = get_settings()
    mount_upload_dir(app, current.image_url_prefix, current.image_dir, name="food_image")
    await open_recipe_db(app, current)
    logger.info("Recipe Service DB 연결 준비 완료")
    try:
        yield
    finally:
        await close_recipe_db(app)
        logger.info("Recipe Service 종료")


app = FastAPI(title="Recipe Service", lifespan=lifespan)

register_common_middleware(app, settings.cors_origins)
register_exception_handlers(app)

app.include_router(api_router.router)

logger.info("Recipe Service initialized successfully")
