"""
Favorite CRUD 함수
- 단순 조회/삽입/삭제라 ORM 없이 text() 파라미터 바인딩 SQL 사용
"""
from typing import Dict, List

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from common.logger import get_logger

logger = get_logger("favorite_crud")


async def add_favorite(db: AsyncSession, user_id: int, recipe_id: int) -> None:
    try:
        await db.execute(
            text("INSERT INTO favorites (user_id, recipe_id) VALUES (:user_id, :recipe_id)"),
            {"user_id": user_id, "recipe_id": recipe_id},
        )
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"찜 추가 실패: user_id={user_id}, recipe_id={recipe_id}, error={str(e)}")
        raise

    logger.info(f"찜 추가 완료: user_id={user_id}, recipe_id={recipe_id}")


async def get_favorites_by_user(db: AsyncSession, user_id: int) -> List[Dict]:
    """사용자의 찜 목록 (없으면 빈 리스트)"""
    result = await db.execute(
        text(
            "SELECT favorite_id, user_id, recipe_id FROM favorites "
            "WHERE user_id = :user_id ORDER BY favorite_id"
        ),
        {"user_id": user_id},
    )
    return [dict(row) for row in result.mappings().all()]


async def remove_favorite(db: AsyncSession, user_id: int, recipe_id: int) -> int:
    """
    (user_id, recipe_id) 찜 해제
    - 삭제된 행 수 반환 (0 이어도 오류 아님)
    """
    try:
        result = await db.execute(
            text("DELETE FROM favorites WHERE user_id = :user_id AND recipe_id = :recipe_id"),
            {"user_id": user_id, "recipe_id": recipe_id},
        )
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"찜 해제 실패: user_id={user_id}, recipe_id={recipe_id}, error={str(e)}")
        raise

    logger.info(f"찜 해제 완료: user_id={user_id}, recipe_id={recipe_id}, deleted={result.rowcount}")
    return result.rowcount
