"""
Rating API 라우터
- 저장소 오류는 500 {error}, 대상 없음은 404 {error}
"""
from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.errors import InternalServerErrorException, NotFoundException
from common.logger import get_logger
from services.rating.crud.rating_crud import (
    create_rating,
    delete_rating,
    get_ratings,
    get_ratings_by_recipe,
    update_rating,
)
from services.rating.database import get_rating_db
from services.rating.schemas.rating_schema import RatingCreate, RatingMessage, RatingOut, RatingUpdate

router = APIRouter(prefix="/ratings", tags=["Rating"])
logger = get_logger("rating_router")


@router.post("", response_model=RatingMessage, status_code=status.HTTP_201_CREATED)
async def add_rating(payload: RatingCreate, db: AsyncSession = Depends(get_rating_db)):
    try:
        await create_rating(db, payload.user_id, payload.recipe_id, payload.score, payload.comment)
    except SQLAlchemyError as e:
        raise InternalServerErrorException(str(e))
    return {"message": "Rating created successfully"}


@router.get("", response_model=List[RatingOut])
async def list_ratings(db: AsyncSession = Depends(get_rating_db)):
    try:
        return await get_ratings(db)
    except SQLAlchemyError as e:
        logger.error(f"평점 목록 조회 실패: {str(e)}")
        raise InternalServerErrorException(str(e))


@router.get("/{recipe_id}", response_model=List[RatingOut])
async def list_recipe_ratings(
    recipe_id: int = Path(..., description="레시피 ID"),
    db: AsyncSession = Depends(get_rating_db),
):
    """레시피에 달린 평점 목록 (평점이 없으면 빈 배열)"""
    try:
        return await get_ratings_by_recipe(db, recipe_id)
    except SQLAlchemyError as e:
        logger.error(f"레시피 평점 조회 실패: recipe_id={recipe_id}, error={str(e)}")
        raise InternalServerErrorException(str(e))


@router.put("/{rating_id}", response_model=RatingMessage)
async def put_rating(
    payload: RatingUpdate,
    rating_id: int = Path(..., description="평점 ID"),
    db: AsyncSession = Depends(get_rating_db),
):
    try:
        updated = await update_rating(db, rating_id, payload.score, payload.comment)
    except SQLAlchemyError as e:
        raise InternalServerErrorException(str(e))

    if not updated:
        raise NotFoundException("Rating not found", key="error")
    return {"message": "Rating updated successfully"}


@router.delete("/{rating_id}", response_model=RatingMessage)
async def remove_rating(
    rating_id: int = Path(..., description="평점 ID"),
    db: AsyncSession = Depends(get_rating_db),
):
    try:
        deleted = await delete_rating(db, rating_id)
    except SQLAlchemyError as e:
        raise InternalServerErrorException(str(e))

    if not deleted:
        raise NotFoundException("Rating not found", key="error")
    return {"message": "Rating deleted successfully"}
