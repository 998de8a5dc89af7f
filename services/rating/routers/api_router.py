"""
Rating 서비스 라우터 통합
"""

from fastapi import APIRouter

from services.rating.routers.rating_router import router as rating_router

router = APIRouter()

router.include_router(rating_router)
