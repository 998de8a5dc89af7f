"""
레시피-재료 연결 행 API 라우터 (/recipe-ingredients)
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.errors import BadRequestException, InternalServerErrorException, NotFoundException, parse_path_id
from common.logger import get_logger
from services.recipe.crud.recipe_ingredient_crud import (
    create_recipe_ingredient,
    delete_recipe_ingredient,
    get_all_recipe_ingredients,
    get_recipe_ingredients,
    update_recipe_ingredient_quantity,
)
from services.recipe.database import get_recipe_db
from services.recipe.schemas.ingredient_schema import (
    RecipeIngredientCreate,
    RecipeIngredientRow,
    RecipeIngredientUpdate,
)
from services.recipe.schemas.recipe_schema import MessageResponse

router = APIRouter(prefix="/recipe-ingredients", tags=["Recipe Ingredient"])
logger = get_logger("recipe_ingredient_router")


@router.get("", response_model=List[RecipeIngredientRow])
async def list_all(db: AsyncSession = Depends(get_recipe_db)):
    try:
        return await get_all_recipe_ingredients(db)
    except SQLAlchemyError as e:
        logger.error(f"레시피 재료 전체 조회 실패: error={str(e)}")
        raise InternalServerErrorException()


@router.get("/{recipe_id}", response_model=List[RecipeIngredientRow])
async def list_for_recipe(
    recipe_id: int = Path(..., description="레시피 ID"),
    db: AsyncSession = Depends(get_recipe_db),
):
    try:
        return await get_recipe_ingredients(db, recipe_id)
    except SQLAlchemyError as e:
        logger.error(f"레시피 재료 조회 실패: recipe_id={recipe_id}, error={str(e)}")
        raise InternalServerErrorException()


@router.post("", response_model=RecipeIngredientRow, status_code=status.HTTP_201_CREATED)
async def add_recipe_ingredient(payload: RecipeIngredientCreate, db: AsyncSession = Depends(get_recipe_db)):
    if not payload.recipe_id or not payload.ingredient_id or payload.quantity is None:
        raise BadRequestException("recipe_id, ingredient_id, and quantity are required")

    try:
        return await create_recipe_ingredient(db, payload.recipe_id, payload.ingredient_id, payload.quantity)
    except SQLAlchemyError as e:
        logger.error(f"레시피 재료 추가 실패: payload={payload.model_dump()}, error={str(e)}")
        raise InternalServerErrorException()


@router.patch("/{recipe_ingredient_id}", response_model=RecipeIngredientRow)
async def patch_recipe_ingredient(
    payload: RecipeIngredientUpdate,
    recipe_ingredient_id: str = Path(..., description="레시피 재료 행 ID"),
    db: AsyncSession = Depends(get_recipe_db),
):
    message = "Valid recipe_ingredient_id and quantity are required"
    recipe_ingredient_id = parse_path_id(recipe_ingredient_id, message)
    if payload.quantity is None:
        raise BadRequestException(message)

    try:
        row = await update_recipe_ingredient_quantity(db, recipe_ingredient_id, payload.quantity)
    except SQLAlchemyError as e:
        logger.error(f"레시피 재료 수정 실패: recipe_ingredient_id={recipe_ingredient_id}, error={str(e)}")
        raise InternalServerErrorException()

    if row is None:
        raise NotFoundException("Recipe ingredient not found", key="error")
    return row


@router.delete("/{recipe_ingredient_id}", response_model=MessageResponse)
async def remove_recipe_ingredient(
    recipe_ingredient_id: str = Path(..., description="레시피 재료 행 ID"),
    db: AsyncSession = Depends(get_recipe_db),
):
    recipe_ingredient_id = parse_path_id(recipe_ingredient_id, "Invalid recipe_ingredient_id")
    try:
        deleted = await delete_recipe_ingredient(db, recipe_ingredient_id)
    except SQLAlchemyError as e:
        logger.error(f"레시피 재료 삭제 실패: recipe_ingredient_id={recipe_ingredient_id}, error={str(e)}")
        raise InternalServerErrorException()

    if not deleted:
        raise NotFoundException("Recipe ingredient not found", key="error")
    return {"message": "Deleted successfully"}
