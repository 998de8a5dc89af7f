"""
user 서비스 단독 실행용 (비동기 엔진 기반)
- 업로드된 프로필 이미지는 settings.profile_image_url_prefix 경로로 정적 서빙
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from common.config import get_settings
from common.errors import register_exception_handlers
from common.logger import get_logger
from common.middleware import register_common_middleware
from common.static import mount_upload_dir
from services.user.database import close_user_db, open_user_db
from services.user.routers import api_router

logger = get_logger("user_service")
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    current = get_settings()
    mount_upload_dir(app, current.profile_image_url_prefix, current.profile_image_dir, name="profile_image")
    await open_user_db(app, current)
    try:
        yield
    finally:
        await close_user_db(app)


app = FastAPI(title="User Service", lifespan=lifespan)

register_common_middleware(app, settings.cors_origins)
register_exception_handlers(app)

app.include_router(api_router.router)

logger.info("User Service initialized successfully")
