"""
User 관련 DB 접근 함수 (CRUD) - 비동기 ORM
- 비밀번호는 bcrypt 해시로만 저장/비교
- 부분 수정은 허용된 컬럼만 반영 (요청 키를 그대로 SQL 에 넣지 않음)
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from common.logger import get_logger
from services.user.crud.user_password_crud import hash_password, verify_and_rehash
from services.user.models.user_model import Role, User

logger = get_logger("user_crud")

UPDATABLE_FIELDS = {
    "name",
    "email",
    "bio",
    "profile_image_url",
    "recipe_count",
    "favorite_count",
    "role_id",
}


USER_OUT_FIELDS = (
    "user_id",
    "name",
    "email",
    "bio",
    "profile_image_url",
    "recipe_count",
    "favorite_count",
    "join_date",
    "role_id",
)


def _user_with_role_stmt():
    return select(User, Role.role_name).outerjoin(Role, User.role_id == Role.role_id)


def user_to_dict(user: User, role_name: Optional[str] = None) -> Dict[str, Any]:
    """응답용 dict 변환 (password_hash 제외)"""
    data = {field: getattr(user, field) for field in USER_OUT_FIELDS}
    data["role_name"] = role_name
    return data


async def get_users(db: AsyncSession) -> List[Dict[str, Any]]:
    """전체 사용자 목록 (역할명 포함)"""
    result = await db.execute(_user_with_role_stmt().order_by(User.user_id))
    return [user_to_dict(user, role_name) for user, role_name in result.all()]


async def get_user_detail(db: AsyncSession, user_id: int) -> Optional[Dict[str, Any]]:
    """단일 사용자 (역할명 포함), 없으면 None"""
    result = await db.execute(_user_with_role_stmt().where(User.user_id == user_id))
    row = result.first()
    if row is None:
        return None
    user, role_name = row
    return user_to_dict(user, role_name)


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    """주어진 사용자 ID(user_id)에 해당하는 사용자(User) 객체를 반환 (없으면 None)."""
    result = await db.execute(select(User).where(User.user_id == user_id))  # type: ignore
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    """주어진 이메일(email)에 해당하는 사용자(User) 객체를 반환 (없으면 None)."""
    result = await db.execute(select(User).where(User.email == email))  # type: ignore
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, data: Dict[str, Any]) -> User:
    """
    신규 사용자 생성
    - password 는 해싱 후 password_hash 로 저장
    - join_date 미지정 시 현재 시각
    """
    values = dict(data)
    password = values.pop("password")
    if values.get("join_date") is None:
        values["join_date"] = datetime.utcnow()

    user = User(password_hash=hash_password(password), **values)
    try:
        db.add(user)
        await db.commit()
        await db.refresh(user)
    except Exception as e:
        await db.rollback()
        logger.error(f"사용자 생성 실패: email={values.get('email')}, error={str(e)}")
        raise

    logger.info(f"사용자 생성 완료: user_id={user.user_id}, email={user.email}")
    return user


async def update_user(db: AsyncSession, user_id: int, updates: Dict[str, Any]) -> Optional[User]:
    """요청에 포함된 필드만 갱신, 대상이 없으면 None"""
    user = await get_user_by_id(db, user_id)
    if user is None:
        return None

    try:
        for key, value in updates.items():
            if key == "password":
                user.password_hash = hash_password(value)
            elif key in UPDATABLE_FIELDS:
                setattr(user, key, value)
        await db.commit()
        await db.refresh(user)
    except Exception as e:
        await db.rollback()
        logger.error(f"사용자 수정 실패: user_id={user_id}, error={str(e)}")
        raise

    logger.info(f"사용자 수정 완료: user_id={user_id}, fields={sorted(updates)}")
    return user


async def delete_user(db: AsyncSession, user_id: int) -> bool:
    user = await get_user_by_id(db, user_id)
    if user is None:
        return False

    try:
        await db.delete(user)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"사용자 삭제 실패: user_id={user_id}, error={str(e)}")
        raise

    logger.info(f"사용자 삭제 완료: user_id={user_id}")
    return True


async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
    """
    이메일/비밀번호 검증 - 실패 시 None
    - 해시 정책이 바뀐 계정은 검증 성공 시 새 해시로 저장
    """
    user = await get_user_by_email(db, email)
    if user is None:
        return None

    matched, new_hash = verify_and_rehash(password, user.password_hash)
    if not matched:
        return None

    if new_hash:
        try:
            user.password_hash = new_hash
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error(f"비밀번호 재해시 저장 실패: user_id={user.user_id}, error={str(e)}")
            raise
        logger.info(f"비밀번호 해시 갱신: user_id={user.user_id}")
    return user


async def set_profile_image_url(db: AsyncSession, user_id: int, image_url: str) -> bool:
    """프로필 이미지 URL 만 갱신, 대상이 없으면 False"""
    try:
        result = await db.execute(
            update(User).where(User.user_id == user_id).values(profile_image_url=image_url)  # type: ignore
        )
        if result.rowcount == 0:
            await db.rollback()
            logger.warning(f"프로필 이미지 대상 사용자 없음: user_id={user_id}")
            return False
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"프로필 이미지 URL 저장 실패: user_id={user_id}, error={str(e)}")
        raise

    logger.info(f"프로필 이미지 URL 저장 완료: user_id={user_id}, image_url={image_url}")
    return True
