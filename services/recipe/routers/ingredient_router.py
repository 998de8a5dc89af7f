"""
재료 마스터 API 라우터
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.errors import BadRequestException, InternalServerErrorException, NotFoundException, parse_path_id
from common.logger import get_logger
from services.recipe.crud.ingredient_crud import (
    create_ingredient,
    delete_ingredient,
    get_ingredients,
    update_ingredient,
)
from services.recipe.database import get_recipe_db
from services.recipe.schemas.ingredient_schema import IngredientCreate, IngredientOut, IngredientUpdate
from services.recipe.schemas.recipe_schema import MessageResponse

router = APIRouter(prefix="/ingredients", tags=["Ingredient"])
logger = get_logger("ingredient_router")


@router.get("", response_model=List[IngredientOut])
async def list_ingredients(db: AsyncSession = Depends(get_recipe_db)):
    try:
        return await get_ingredients(db)
    except SQLAlchemyError as e:
        logger.error(f"재료 목록 조회 실패: error={str(e)}")
        raise InternalServerErrorException()


@router.post("", response_model=IngredientOut, status_code=status.HTTP_201_CREATED)
async def add_ingredient(payload: IngredientCreate, db: AsyncSession = Depends(get_recipe_db)):
    if not payload.name or not payload.unit:
        raise BadRequestException("name and unit are required")

    try:
        return await create_ingredient(db, payload.name, payload.unit)
    except SQLAlchemyError as e:
        logger.error(f"재료 등록 실패: name={payload.name}, error={str(e)}")
        raise InternalServerErrorException()


@router.patch("/{ingredient_id}", response_model=IngredientOut)
async def patch_ingredient(
    payload: IngredientUpdate,
    ingredient_id: str = Path(..., description="재료 ID"),
    db: AsyncSession = Depends(get_recipe_db),
):
    ingredient_id = parse_path_id(ingredient_id, "Invalid ingredient_id")
    try:
        row = await update_ingredient(db, ingredient_id, payload.name, payload.unit)
    except SQLAlchemyError as e:
        logger.error(f"재료 수정 실패: ingredient_id={ingredient_id}, error={str(e)}")
        raise InternalServerErrorException()

    if row is None:
        raise NotFoundException("Ingredient not found", key="error")
    return row


@router.delete("/{ingredient_id}", response_model=MessageResponse)
async def remove_ingredient(
    ingredient_id: str = Path(..., description="재료 ID"),
    db: AsyncSession = Depends(get_recipe_db),
):
    ingredient_id = parse_path_id(ingredient_id, "Invalid ingredient_id")
    try:
        deleted = await delete_ingredient(db, ingredient_id)
    except SQLAlchemyError as e:
        logger.error(f"재료 삭제 실패: ingredient_id={ingredient_id}, error={str(e)}")
        raise InternalServerErrorException()

    if not deleted:
        raise NotFoundException("Ingredient not found", key="error")
    return {"message": "Ingredient deleted successfully"}
