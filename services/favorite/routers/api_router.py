"""
Favorite 서비스 라우터 통합
"""

from fastapi import APIRouter

from services.favorite.routers.favorite_router import router as favorite_router

router = APIRouter()

router.include_router(favorite_router)
