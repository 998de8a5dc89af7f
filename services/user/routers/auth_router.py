"""
로그인 API
- bcrypt 해시 검증만 수행하고 사용자 정보를 반환 (토큰/세션 발급 없음)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.errors import InternalServerErrorException, NotAuthenticatedException
from common.logger import get_logger
from services.user.crud.user_crud import authenticate_user, get_user_detail
from services.user.database import get_user_db
from services.user.schemas.auth_schema import LoginRequest, LoginResponse

router = APIRouter(tags=["auth"])
logger = get_logger("auth_router")


@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginRequest, db: AsyncSession = Depends(get_user_db)):
    email = str(credentials.email)
    try:
        user = await authenticate_user(db, email, credentials.password)
        if user is None:
            logger.warning(f"Login failed for email: {email}")
            raise NotAuthenticatedException()
        user_data = await get_user_detail(db, user.user_id)
    except SQLAlchemyError as e:
        logger.error(f"Login failed for email {email}: {str(e)}")
        raise InternalServerErrorException(str(e))

    logger.info(f"User logged in successfully: user_id={user.user_id}, email={email}")
    return {"message": "Login successful", "user": user_data}
