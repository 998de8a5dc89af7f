"""
레시피 단계 API 라우터
- 단계 추가, 설명 수정, 단계 삭제(뒤 단계 재번호)
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.exc import SQLAlchemyError

from common.errors import BadRequestException, InternalServerErrorException, NotFoundException
from common.logger import get_logger
from services.recipe.crud.recipe_crud import RecipeRepository
from services.recipe.dependencies import get_recipe_repository
from services.recipe.schemas.recipe_schema import MessageResponse
from services.recipe.schemas.step_schema import StepsCreate, StepsUpdate

router = APIRouter(prefix="/recipes", tags=["Recipe Step"])
logger = get_logger("recipe_step_router")


@router.post("/{recipe_id}/steps", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_steps(
    payload: StepsCreate,
    recipe_id: int = Path(..., description="레시피 ID"),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    """레시피 단계 추가 (빈 배열은 400)"""
    if not payload.steps:
        raise BadRequestException("Steps must be a non-empty array")

    try:
        await repo.add_steps(recipe_id, [step.model_dump() for step in payload.steps])
    except SQLAlchemyError as e:
        logger.error(f"레시피 단계 추가 실패: recipe_id={recipe_id}, error={str(e)}")
        raise InternalServerErrorException()

    return {"message": "Steps added successfully"}


@router.patch("/{recipe_id}/steps", response_model=MessageResponse)
async def update_steps(
    payload: StepsUpdate,
    recipe_id: int = Path(..., description="레시피 ID"),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    """레시피 단계 설명 수정 (step_number / instruction 누락 항목은 건너뜀)"""
    if not payload.steps:
        raise BadRequestException("Steps must be a non-empty array")

    try:
        await repo.update_steps(recipe_id, [step.model_dump() for step in payload.steps])
    except SQLAlchemyError as e:
        logger.error(f"레시피 단계 수정 실패: recipe_id={recipe_id}, error={str(e)}")
        raise InternalServerErrorException()

    return {"message": "Steps updated successfully"}


@router.delete("/{recipe_id}/steps/{step_number}", response_model=MessageResponse)
async def delete_step(
    recipe_id: str = Path(..., description="레시피 ID"),
    step_number: str = Path(..., description="삭제할 단계 번호"),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    """단계 삭제 후 뒤 단계 번호를 당겨 1..N 연속 유지"""
    try:
        recipe_id, step_number = int(recipe_id), int(step_number)
    except ValueError:
        raise BadRequestException("Invalid recipe_id or step_number")

    logger.info(f"레시피 단계 삭제 API 호출: recipe_id={recipe_id}, step_number={step_number}")
    try:
        deleted = await repo.delete_step(recipe_id, step_number)
    except SQLAlchemyError as e:
        logger.error(f"레시피 단계 삭제 실패: recipe_id={recipe_id}, step_number={step_number}, error={str(e)}")
        raise InternalServerErrorException()

    if not deleted:
        raise NotFoundException("Step not found", key="error")
    return {"message": "Step deleted successfully"}
