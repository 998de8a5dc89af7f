"""
User 서비스 라우터 통합 (사용자, 프로필 이미지, 로그인)
"""

from fastapi import APIRouter

from services.user.routers.auth_router import router as auth_router
from services.user.routers.profile_router import router as profile_router
from services.user.routers.user_router import router as user_router

router = APIRouter()

router.include_router(user_router)
router.include_router(profile_router)
router.include_router(auth_router)
