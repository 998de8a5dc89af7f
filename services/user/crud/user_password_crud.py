"""
비밀번호 해시 유틸 (passlib + bcrypt)
- 평문 비밀번호는 저장/비교하지 않음
"""
from typing import Optional, Tuple

from passlib.context import CryptContext

from common.logger import get_logger

logger = get_logger("user_password")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain_pw: str) -> str:
    return pwd_context.hash(plain_pw)


def verify_password(plain_pw: str, hashed_pw: Optional[str]) -> bool:
    """해시 형식이 깨진 값(식별 불가)은 불일치로 처리"""
    if not hashed_pw:
        return False
    try:
        return pwd_context.verify(plain_pw, hashed_pw)
    except ValueError:
        logger.warning("식별할 수 없는 비밀번호 해시 형식")
        return False


def verify_and_rehash(plain_pw: str, hashed_pw: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    검증 + 재해시 필요 여부
    - (일치 여부, 새 해시 또는 None) 반환
    - bcrypt rounds 등 정책이 바뀐 기존 해시는 로그인 시점에 새 해시로 교체
    """
    if not verify_password(plain_pw, hashed_pw):
        return False, None
    if pwd_context.needs_update(hashed_pw):
        return True, hash_password(plain_pw)
    return True, None
