"""
레시피 이미지 업로드/조회 API
- 업로드 파일은 settings.image_dir 에 recipe_<epoch_ms><ext> 로 저장
- 정적 서빙 경로(settings.image_url_prefix) 기준 URL 을 recipes.image_url 에 기록
"""

import os
import time
from typing import Optional

import anyio
from fastapi import APIRouter, Depends, File, Path, UploadFile
from sqlalchemy.exc import SQLAlchemyError

from common.config import get_settings
from common.errors import BadRequestException, InternalServerErrorException, NotFoundException
from common.logger import get_logger
from services.recipe.crud.recipe_crud import RecipeRepository
from services.recipe.dependencies import get_recipe_repository
from services.recipe.schemas.recipe_schema import ImageUploadResponse, ImageUrlResponse

router = APIRouter(prefix="/recipes", tags=["Recipe Image"])
logger = get_logger("recipe_image_router")


def build_image_filename(original_name: Optional[str]) -> str:
    """원본 확장자를 유지한 고유 파일명 생성"""
    ext = os.path.splitext(original_name or "")[1].lower()
    return f"recipe_{int(time.time() * 1000)}{ext}"


@router.post("/{recipe_id}/upload-image", response_model=ImageUploadResponse)
async def upload_image(
    recipe_id: int = Path(..., description="레시피 ID"),
    image: Optional[UploadFile] = File(None),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    if image is None or not image.filename:
        raise BadRequestException("No image uploaded")

    settings = get_settings()
    filename = build_image_filename(image.filename)
    target = anyio.Path(settings.image_dir) / filename
    await target.parent.mkdir(parents=True, exist_ok=True)
    await target.write_bytes(await image.read())

    image_url = f"{settings.image_url_prefix.rstrip('/')}/{filename}"
    try:
        row = await repo.set_image_url(recipe_id, image_url)
    except SQLAlchemyError as e:
        logger.error(f"레시피 이미지 URL 저장 실패: recipe_id={recipe_id}, error={str(e)}")
        await target.unlink(missing_ok=True)
        raise InternalServerErrorException()

    if row is None:
        await target.unlink(missing_ok=True)
        raise NotFoundException("Recipe not found", key="error")

    logger.info(f"레시피 이미지 업로드 완료: recipe_id={recipe_id}, file={filename}")
    return {"message": "Image uploaded successfully", "data": row}


@router.get("/{recipe_id}/image", response_model=ImageUrlResponse)
async def get_image(
    recipe_id: int = Path(..., description="레시피 ID"),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    try:
        row = await repo.get_image_url(recipe_id)
    except SQLAlchemyError as e:
        logger.error(f"레시피 이미지 URL 조회 실패: recipe_id={recipe_id}, error={str(e)}")
        raise InternalServerErrorException()

    if row is None:
        raise NotFoundException("Recipe not found", key="error")
    return {"imageUrl": row["image_url"]}
