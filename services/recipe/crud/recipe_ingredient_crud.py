"""
레시피-재료 연결 행(recipe_ingredients) 단건 CRUD 함수
- 레시피 전체 교체는 RecipeRepository.update 를 사용하고, 여기서는 행 단위 조작만 담당
"""

from typing import Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from common.logger import get_logger

logger = get_logger("recipe_ingredient_crud")

_ROW_COLUMNS = "recipe_ingredient_id, recipe_id, ingredient_id, quantity"


async def get_all_recipe_ingredients(db: AsyncSession) -> List[Dict]:
    """전체 연결 행 + 재료명/단위"""
    result = await db.execute(text(
        """
        SELECT ri.recipe_ingredient_id, ri.recipe_id, ri.ingredient_id, ri.quantity,
               i.name AS ingredient_name, i.unit
        FROM recipe_ingredients ri
        JOIN ingredients i ON ri.ingredient_id = i.ingredient_id
        ORDER BY ri.recipe_ingredient_id
        """
    ))
    return [dict(row) for row in result.mappings().all()]


async def get_recipe_ingredients(db: AsyncSession, recipe_id: int) -> List[Dict]:
    result = await db.execute(
        text(f"SELECT {_ROW_COLUMNS} FROM recipe_ingredients WHERE recipe_id = :recipe_id ORDER BY recipe_ingredient_id"),
        {"recipe_id": recipe_id},
    )
    return [dict(row) for row in result.mappings().all()]


async def create_recipe_ingredient(db: AsyncSession, recipe_id: int, ingredient_id: int, quantity: float) -> Dict:
    try:
        row = (await db.execute(
            text(
                "INSERT INTO recipe_ingredients (recipe_id, ingredient_id, quantity) "
                f"VALUES (:recipe_id, :ingredient_id, :quantity) RETURNING {_ROW_COLUMNS}"
            ),
            {"recipe_id": recipe_id, "ingredient_id": ingredient_id, "quantity": quantity},
        )).mappings().one()
        data = dict(row)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"레시피 재료 추가 실패: recipe_id={recipe_id}, ingredient_id={ingredient_id}, error={str(e)}")
        raise

    logger.info(f"레시피 재료 추가 완료: recipe_ingredient_id={data['recipe_ingredient_id']}")
    return data


async def update_recipe_ingredient_quantity(db: AsyncSession, recipe_ingredient_id: int, quantity: float) -> Optional[Dict]:
    """수량 수정, 대상이 없으면 None"""
    try:
        row = (await db.execute(
            text(
                "UPDATE recipe_ingredients SET quantity = :quantity "
                f"WHERE recipe_ingredient_id = :recipe_ingredient_id RETURNING {_ROW_COLUMNS}"
            ),
            {"quantity": quantity, "recipe_ingredient_id": recipe_ingredient_id},
        )).mappings().first()
        if row is None:
            await db.rollback()
            return None
        data = dict(row)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"레시피 재료 수정 실패: recipe_ingredient_id={recipe_ingredient_id}, error={str(e)}")
        raise

    return data


async def delete_recipe_ingredient(db: AsyncSession, recipe_ingredient_id: int) -> bool:
    try:
        result = await db.execute(
            text("DELETE FROM recipe_ingredients WHERE recipe_ingredient_id = :recipe_ingredient_id"),
            {"recipe_ingredient_id": recipe_ingredient_id},
        )
        if result.rowcount == 0:
            await db.rollback()
            return False
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"레시피 재료 삭제 실패: recipe_ingredient_id={recipe_ingredient_id}, error={str(e)}")
        raise

    return True
