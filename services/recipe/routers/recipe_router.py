"""
레시피 집계 CRUD API 라우터
- HTTP 요청/응답, 파라미터 파싱만 담당
- 트랜잭션(commit/rollback)은 RecipeRepository 가 담당
- not-found -> 404 {message}, DB 오류 -> 500
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.exc import SQLAlchemyError

from common.errors import InternalServerErrorException, NotFoundException, parse_path_id
from common.logger import get_logger
from services.recipe.crud.recipe_crud import RecipeRepository
from services.recipe.dependencies import get_recipe_repository
from services.recipe.schemas.recipe_schema import (
    MessageResponse,
    RecipeCreate,
    RecipeCreateResponse,
    RecipeDetailResponse,
    RecipeUpdate,
)

router = APIRouter(prefix="/recipes", tags=["Recipe"])
logger = get_logger("recipe_router")


@router.post("", response_model=RecipeCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    payload: RecipeCreate,
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    """
    레시피 생성 (레시피 + 재료 + 단계를 하나의 트랜잭션으로)
    - 실패 시 부분 생성 없이 500 {error, details}
    """
    logger.info(f"레시피 생성 API 호출: user_id={payload.user_id}, recipe_name={payload.recipe_name}")
    try:
        recipe_id = await repo.create(
            recipe_name=payload.recipe_name,
            user_id=payload.user_id,
            image_url=payload.image_url,
            cooking_time=payload.cooking_time,
            description=payload.description,
            difficulty=payload.difficulty,
            ingredients=[ingredient.model_dump() for ingredient in payload.ingredients],
            steps=[step.model_dump() for step in payload.steps],
        )
    except SQLAlchemyError as e:
        logger.error(f"레시피 생성 실패: user_id={payload.user_id}, error={str(e)}")
        raise InternalServerErrorException("Failed to create recipe", details=str(getattr(e, "orig", None) or e))

    return {"message": "Recipe created successfully", "recipe_id": recipe_id}


@router.get("", response_model=List[RecipeDetailResponse])
async def list_recipes(repo: RecipeRepository = Depends(get_recipe_repository)):
    """전체 레시피 (재료/단계 포함) 조회"""
    logger.debug("전체 레시피 조회 API 호출")
    try:
        return await repo.get_all()
    except SQLAlchemyError as e:
        logger.error(f"전체 레시피 조회 실패: error={str(e)}")
        raise InternalServerErrorException(str(e))


@router.get("/user/{user_id}", response_model=List[RecipeDetailResponse])
async def list_user_recipes(
    user_id: int = Path(..., description="작성자 ID"),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    """
    사용자별 레시피 조회
    - 레시피가 없으면 404 (프론트에서는 '아직 레시피 없음' 상태로 처리)
    """
    logger.debug(f"사용자 레시피 조회 API 호출: user_id={user_id}")
    try:
        recipes = await repo.get_by_user(user_id)
    except SQLAlchemyError as e:
        logger.error(f"사용자 레시피 조회 실패: user_id={user_id}, error={str(e)}")
        raise InternalServerErrorException("Server error")

    if recipes is None:
        raise NotFoundException("No recipes found for this user")
    return recipes


@router.get("/{recipe_id}", response_model=RecipeDetailResponse)
async def get_recipe(
    recipe_id: int = Path(..., description="레시피 ID"),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    """레시피 상세 (재료 + 단계) 조회"""
    logger.debug(f"레시피 상세 조회 API 호출: recipe_id={recipe_id}")
    try:
        recipe = await repo.get_by_id(recipe_id)
    except SQLAlchemyError as e:
        logger.error(f"레시피 상세 조회 실패: recipe_id={recipe_id}, error={str(e)}")
        raise InternalServerErrorException("Server error")

    if recipe is None:
        raise NotFoundException("Recipe not found")
    return recipe


@router.patch("/{recipe_id}", response_model=MessageResponse)
async def update_recipe(
    payload: RecipeUpdate,
    recipe_id: int = Path(..., description="레시피 ID"),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    """
    레시피 전체 수정
    - 스칼라 필드는 모두 다시 보내야 함 (부분 수정 아님)
    - 재료/단계 목록은 전달받은 목록으로 전체 교체
    """
    logger.info(f"레시피 수정 API 호출: recipe_id={recipe_id}")
    try:
        updated = await repo.update(
            recipe_id,
            recipe_name=payload.recipe_name,
            image_url=payload.image_url,
            cooking_time=payload.cooking_time,
            description=payload.description,
            difficulty=payload.difficulty,
            ingredients=[ingredient.model_dump() for ingredient in payload.ingredients],
            steps=[step.model_dump() for step in payload.steps],
        )
    except SQLAlchemyError as e:
        logger.error(f"레시피 수정 실패: recipe_id={recipe_id}, error={str(e)}")
        raise InternalServerErrorException("Server error")

    if not updated:
        raise NotFoundException("Recipe not found")
    return {"message": "Recipe updated successfully"}


@router.delete("/{recipe_id}", response_model=MessageResponse)
async def delete_recipe(
    recipe_id: str = Path(..., description="레시피 ID"),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    """레시피 삭제 (단계, 재료 연결, 레시피를 하나의 트랜잭션으로)"""
    recipe_id = parse_path_id(recipe_id, "Invalid recipe ID", key="message")
    logger.info(f"레시피 삭제 API 호출: recipe_id={recipe_id}")
    try:
        deleted = await repo.delete_by_id(recipe_id)
    except SQLAlchemyError as e:
        logger.error(f"레시피 삭제 실패: recipe_id={recipe_id}, error={str(e)}")
        raise InternalServerErrorException(
            "Failed to delete recipe", key="message", details=str(e), details_key="error"
        )

    if not deleted:
        raise NotFoundException("Recipe not found")
    return {"message": "Recipe deleted successfully"}
