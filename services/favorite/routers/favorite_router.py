"""
Favorite API 라우터
"""
from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.errors import InternalServerErrorException
from common.logger import get_logger
from services.favorite.crud.favorite_crud import add_favorite, get_favorites_by_user, remove_favorite
from services.favorite.database import get_favorite_db
from services.favorite.schemas.favorite_schema import FavoriteMessage, FavoriteOut, FavoriteRequest

router = APIRouter(prefix="/favorites", tags=["Favorite"])
logger = get_logger("favorite_router")


@router.post("", response_model=FavoriteMessage, status_code=status.HTTP_201_CREATED)
async def create_favorite(payload: FavoriteRequest, db: AsyncSession = Depends(get_favorite_db)):
    try:
        await add_favorite(db, payload.user_id, payload.recipe_id)
    except SQLAlchemyError as e:
        raise InternalServerErrorException(str(e))
    return {"message": "Favorite added successfully"}


@router.get("/{user_id}", response_model=List[FavoriteOut])
async def list_favorites(
    user_id: int = Path(..., description="사용자 ID"),
    db: AsyncSession = Depends(get_favorite_db),
):
    try:
        return await get_favorites_by_user(db, user_id)
    except SQLAlchemyError as e:
        logger.error(f"찜 목록 조회 실패: user_id={user_id}, error={str(e)}")
        raise InternalServerErrorException(str(e))


@router.delete("", response_model=FavoriteMessage)
async def delete_favorite(payload: FavoriteRequest, db: AsyncSession = Depends(get_favorite_db)):
    """찜 해제 - 대상은 요청 바디의 {userId, recipeId} 로 지정"""
    try:
        await remove_favorite(db, payload.user_id, payload.recipe_id)
    except SQLAlchemyError as e:
        raise InternalServerErrorException(str(e))
    return {"message": "Favorite removed successfully"}
