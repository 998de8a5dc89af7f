"""
User API 엔드포인트 (조회, 생성, 부분 수정, 삭제) - 비동기 패턴
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.errors import (
    BadRequestException,
    ConflictException,
    InternalServerErrorException,
    NotFoundException,
)
from common.logger import get_logger
from services.user.crud.user_crud import (
    create_user,
    delete_user,
    get_user_by_email,
    get_user_detail,
    get_users,
    update_user,
)
from services.user.database import get_user_db
from services.user.schemas.user_schema import UserCreate, UserMessage, UserOut, UserUpdate

router = APIRouter(prefix="/users", tags=["user"])
logger = get_logger("user_router")


@router.get("", response_model=List[UserOut])
async def list_users(db: AsyncSession = Depends(get_user_db)):
    try:
        return await get_users(db)
    except SQLAlchemyError as e:
        logger.error(f"사용자 목록 조회 실패: {str(e)}")
        raise InternalServerErrorException(str(e))


@router.get("/{user_id}", response_model=UserOut)
async def read_user(
    user_id: int = Path(..., description="사용자 ID"),
    db: AsyncSession = Depends(get_user_db),
):
    try:
        user = await get_user_detail(db, user_id)
    except SQLAlchemyError as e:
        logger.error(f"사용자 조회 실패: user_id={user_id}, error={str(e)}")
        raise InternalServerErrorException(str(e))

    if user is None:
        raise NotFoundException("User not found", key="error")
    return user


@router.post("", response_model=UserMessage, status_code=status.HTTP_201_CREATED)
async def signup(user: UserCreate, db: AsyncSession = Depends(get_user_db)):
    """
    사용자 생성
    - 이메일 중복 체크
    - 비밀번호는 bcrypt 해시로 저장
    """
    try:
        if await get_user_by_email(db, str(user.email)):
            logger.warning(f"Signup attempt with duplicate email: {user.email}")
            raise ConflictException("Email already registered")

        new_user = await create_user(db, user.model_dump())
    except SQLAlchemyError as e:
        logger.error(f"Signup failed for email {user.email}: {str(e)}")
        raise InternalServerErrorException(str(e))

    logger.info(f"New user registered successfully: user_id={new_user.user_id}, email={user.email}")
    return {"message": "User created successfully"}


@router.patch("/{user_id}", response_model=UserMessage)
async def patch_user(
    payload: UserUpdate,
    user_id: int = Path(..., description="사용자 ID"),
    db: AsyncSession = Depends(get_user_db),
):
    """사용자 부분 수정 - 요청 바디에 포함된 필드만 갱신"""
    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        raise BadRequestException("No fields provided for update")

    try:
        user = await update_user(db, user_id, updates)
    except SQLAlchemyError as e:
        logger.error(f"사용자 수정 실패: user_id={user_id}, error={str(e)}")
        raise InternalServerErrorException(str(e))

    if user is None:
        raise NotFoundException("User not found", key="error")
    return {"message": "User updated successfully"}


@router.delete("/{user_id}", response_model=UserMessage)
async def remove_user(
    user_id: int = Path(..., description="사용자 ID"),
    db: AsyncSession = Depends(get_user_db),
):
    try:
        deleted = await delete_user(db, user_id)
    except SQLAlchemyError as e:
        logger.error(f"사용자 삭제 실패: user_id={user_id}, error={str(e)}")
        raise InternalServerErrorException(str(e))

    if not deleted:
        raise NotFoundException("User not found", key="error")
    return {"message": "User deleted successfully"}
