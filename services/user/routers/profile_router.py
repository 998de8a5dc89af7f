"""
프로필 이미지 업로드 API
- multipart 필드명 profile_image, JPEG/PNG 만 허용, 크기 제한은 settings.profile_image_max_bytes
- 파일은 settings.profile_image_dir 에 user_<user_id>_<epoch_ms><ext> 로 저장
"""

import os
import time
from typing import Optional

import anyio
from fastapi import APIRouter, Depends, File, Path, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.config import get_settings
from common.errors import BadRequestException, InternalServerErrorException, NotFoundException
from common.logger import get_logger
from services.user.crud.user_crud import set_profile_image_url
from services.user.database import get_user_db
from services.user.schemas.user_schema import ProfileImageResponse

router = APIRouter(prefix="/users", tags=["user"])
logger = get_logger("profile_router")

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/jpg"}


def build_profile_filename(user_id: int, original_name: Optional[str]) -> str:
    ext = os.path.splitext(original_name or "")[1].lower()
    return f"user_{user_id}_{int(time.time() * 1000)}{ext}"


@router.post("/{user_id}/upload-profile-image", response_model=ProfileImageResponse)
async def upload_profile_image(
    user_id: int = Path(..., description="사용자 ID"),
    profile_image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_user_db),
):
    if profile_image is None or not profile_image.filename:
        raise BadRequestException("No image file uploaded")
    if profile_image.content_type not in ALLOWED_CONTENT_TYPES:
        logger.warning(f"허용되지 않는 프로필 이미지 형식: user_id={user_id}, type={profile_image.content_type}")
        raise BadRequestException("Only JPEG and PNG images are allowed")

    settings = get_settings()
    content = await profile_image.read()
    if len(content) > settings.profile_image_max_bytes:
        raise BadRequestException("File too large")

    filename = build_profile_filename(user_id, profile_image.filename)
    target = anyio.Path(settings.profile_image_dir) / filename
    await target.parent.mkdir(parents=True, exist_ok=True)
    await target.write_bytes(content)

    image_url = f"{settings.profile_image_url_prefix.rstrip('/')}/{filename}"
    try:
        updated = await set_profile_image_url(db, user_id, image_url)
    except SQLAlchemyError as e:
        await target.unlink(missing_ok=True)
        raise InternalServerErrorException(str(e))

    if not updated:
        await target.unlink(missing_ok=True)
        raise NotFoundException("User not found", key="error")

    logger.info(f"프로필 이미지 업로드 완료: user_id={user_id}, file={filename}")
    return {"message": "Profile image uploaded successfully", "imageUrl": image_url}
