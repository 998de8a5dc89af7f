"""
재료 마스터(ingredients) CRUD 함수
- 레시피 집계와 독립된 생명주기 (레시피에서 참조 중인 재료 삭제 시 외래키 오류 전파)
"""

from typing import Dict, List, Optional

from sqlalchemy import String, bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession

from common.logger import get_logger

logger = get_logger("ingredient_crud")


async def get_ingredients(db: AsyncSession) -> List[Dict]:
    """재료 전체 목록 (ingredient_id 순)"""
    result = await db.execute(text("SELECT ingredient_id, name, unit FROM ingredients ORDER BY ingredient_id"))
    return [dict(row) for row in result.mappings().all()]


async def create_ingredient(db: AsyncSession, name: str, unit: str) -> Dict:
    """재료 등록 후 생성된 행 반환"""
    try:
        row = (await db.execute(
            text("INSERT INTO ingredients (name, unit) VALUES (:name, :unit) RETURNING ingredient_id, name, unit"),
            {"name": name, "unit": unit},
        )).mappings().one()
        data = dict(row)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"재료 등록 실패: name={name}, error={str(e)}")
        raise

    logger.info(f"재료 등록 완료: ingredient_id={data['ingredient_id']}, name={name}")
    return data


async def update_ingredient(
    db: AsyncSession,
    ingredient_id: int,
    name: Optional[str] = None,
    unit: Optional[str] = None,
) -> Optional[Dict]:
    """
    재료 부분 수정 (COALESCE: None 으로 넘긴 필드는 기존 값 유지)
    - 대상이 없으면 None
    """
    stmt = text(
        "UPDATE ingredients SET name = COALESCE(:name, name), unit = COALESCE(:unit, unit) "
        "WHERE ingredient_id = :ingredient_id RETURNING ingredient_id, name, unit"
    ).bindparams(bindparam("name", type_=String), bindparam("unit", type_=String))
    try:
        row = (await db.execute(stmt, {"name": name, "unit": unit, "ingredient_id": ingredient_id})).mappings().first()
        if row is None:
            await db.rollback()
            logger.warning(f"수정할 재료 없음: ingredient_id={ingredient_id}")
            return None
        data = dict(row)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"재료 수정 실패: ingredient_id={ingredient_id}, error={str(e)}")
        raise

    return data


async def delete_ingredient(db: AsyncSession, ingredient_id: int) -> bool:
    """재료 삭제, 대상이 없으면 False"""
    try:
        result = await db.execute(
            text("DELETE FROM ingredients WHERE ingredient_id = :ingredient_id"),
            {"ingredient_id": ingredient_id},
        )
        if result.rowcount == 0:
            await db.rollback()
            return False
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"재료 삭제 실패: ingredient_id={ingredient_id}, error={str(e)}")
        raise

    logger.info(f"재료 삭제 완료: ingredient_id={ingredient_id}")
    return True
