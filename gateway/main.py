"""
gateway/main.py
---------------
API Gateway 서비스 진입점.
각 서비스의 FastAPI router를 통합해서 전체 API 엔드포인트로 제공한다.
- lifespan 에서 서비스별 DB 커넥션 풀을 열고 종료 시 반환
- 업로드 이미지 디렉토리(레시피, 프로필)도 lifespan 시점 설정으로 마운트
- CORS, 요청 로깅, 공통 예외처리도 이곳에서 적용
"""
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from common.config import get_settings
from common.errors import register_exception_handlers
from common.logger import get_logger
from common.middleware import register_common_middleware
from common.static import mount_upload_dir
from services.favorite.database import close_favorite_db, open_favorite_db
from services.favorite.routers.api_router import router as favorite_router
from services.rating.database import close_rating_db, open_rating_db
from services.rating.routers.api_router import router as rating_router
from services.recipe.database import close_recipe_db, open_recipe_db
from services.recipe.routers.api_router import router as recipe_router
from services.user.database import close_user_db, open_user_db
from services.user.routers.api_router import router as user_router

logger = get_logger("gateway")
logger.info("API Gateway 초기화 시작...")

try:
    settings = get_settings()
    logger.info("설정 로드 완료")
except Exception as e:
    logger.error(f"설정 로드 실패: {e}")
    raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    current = get_settings()
    mount_upload_dir(app, current.image_url_prefix, current.image_dir, name="food_image")
    mount_upload_dir(app, current.profile_image_url_prefix, current.profile_image_dir, name="profile_image")

    await open_recipe_db(app, current)
    await open_user_db(app, current)
    await open_rating_db(app, current)
    await open_favorite_db(app, current)
    logger.info("모든 서비스 DB 연결 준비 완료")
    try:
        yield
    finally:
        await close_favorite_db(app)
        await close_rating_db(app)
        await close_user_db(app)
        await close_recipe_db(app)
        logger.info("API Gateway 종료")


logger.info(f"FastAPI 애플리케이션 생성: 제목={settings.app_name}, 디버그={settings.debug}")

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    lifespan=lifespan,
)

register_common_middleware(app, settings.cors_origins)
register_exception_handlers(app)

# 라우터 등록 (각 서비스별 router를 include)
logger.info("서비스 라우터 등록 중...")

app.include_router(recipe_router)
logger.info("레시피 라우터 포함 완료")

app.include_router(user_router)
logger.info("사용자 라우터 포함 완료")

app.include_router(rating_router)
logger.info("평점 라우터 포함 완료")

app.include_router(favorite_router)
logger.info("찜 라우터 포함 완료")

logger.info("모든 서비스 라우터 등록 완료")


if __name__ == "__main__":
    uvicorn.run("gateway.main:app", host="0.0.0.0", port=8000, reload=True)
