"""
레시피 집계(레시피 + 재료 + 단계) DB 접근 계층
- recipes / recipe_ingredients / recipe_steps 세 테이블의 유일한 쓰기 주체
- 모든 SQL 은 text() + 바인드 파라미터, 다건 INSERT 는 파라미터 리스트로 executemany
- 다단계 쓰기(create, update, delete, delete_step)는 하나의 트랜잭션으로 commit/rollback
- not-found 는 None / False 반환, DB 오류는 SQLAlchemyError 그대로 전파 (라우터에서 HTTP 변환)
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from common.logger import get_logger

logger = get_logger("recipe_crud")

RECIPE_COLUMNS = (
    "recipe_id",
    "recipe_name",
    "image_url",
    "cooking_time",
    "description",
    "difficulty",
    "user_id",
)

_RECIPE_JOIN_SELECT = """
    SELECT
        r.recipe_id,
        r.recipe_name,
        r.image_url,
        r.cooking_time,
        r.description,
        r.difficulty,
        r.user_id,
        i.ingredient_id,
        i.name AS ingredient_name,
        i.unit,
        ri.quantity
    FROM recipes r
    LEFT JOIN recipe_ingredients ri ON r.recipe_id = ri.recipe_id
    LEFT JOIN ingredients i ON ri.ingredient_id = i.ingredient_id
"""

INSERT_RECIPE_SQL = """
    INSERT INTO recipes (recipe_name, user_id, image_url, cooking_time, description, difficulty)
    VALUES (:recipe_name, :user_id, :image_url, :cooking_time, :description, :difficulty)
    RETURNING recipe_id
"""

INSERT_RECIPE_INGREDIENT_SQL = """
    INSERT INTO recipe_ingredients (recipe_id, ingredient_id, quantity)
    VALUES (:recipe_id, :ingredient_id, :quantity)
"""

INSERT_STEP_SQL = """
    INSERT INTO recipe_steps (recipe_id, step_number, instruction)
    VALUES (:recipe_id, :step_number, :instruction)
"""


def group_recipe_rows(
    recipe_rows: Iterable[Mapping[str, Any]],
    step_rows: Iterable[Mapping[str, Any]],
) -> List[Dict[str, Any]]:
    """
    LEFT JOIN 평탄 행 -> recipe_id 기준 집계 리스트
    - 처음 등장한 순서대로 집계 생성 (SQL ORDER BY r.recipe_id 순서 유지)
    - ingredient_id 가 NULL 인 행(재료 없는 레시피)은 재료로 추가하지 않음
    - 단계는 이미 (recipe_id, step_number) 로 정렬된 행을 해당 레시피에 순서대로 붙임
    """
    grouped: Dict[Any, Dict[str, Any]] = {}

    for row in recipe_rows:
        recipe_id = row["recipe_id"]
        recipe = grouped.get(recipe_id)
        if recipe is None:
            recipe = {column: row[column] for column in RECIPE_COLUMNS}
            recipe["ingredients"] = []
            recipe["steps"] = []
            grouped[recipe_id] = recipe

        if row["ingredient_id"] is not None:
            recipe["ingredients"].append({
                "ingredient_id": row["ingredient_id"],
                "ingredient_name": row["ingredient_name"],
                "unit": row["unit"],
                "quantity": row["quantity"],
            })

    for step in step_rows:
        recipe = grouped.get(step["recipe_id"])
        if recipe is not None:
            recipe["steps"].append({
                "step_number": step["step_number"],
                "instruction": step["instruction"],
            })

    return list(grouped.values())


def _ingredient_params(recipe_id: int, ingredients: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "recipe_id": recipe_id,
            "ingredient_id": ingredient.get("ingredient_id"),
            "quantity": ingredient.get("quantity"),
        }
        for ingredient in ingredients
    ]


def _step_params(recipe_id: int, steps: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "recipe_id": recipe_id,
            "step_number": step.get("step_number"),
            "instruction": step.get("instruction"),
        }
        for step in steps
    ]


class RecipeRepository:
    """
    레시피 집계 저장소
    - 요청 단위 AsyncSession 을 주입받아 사용 (커넥션 풀은 앱 lifespan 이 소유)
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------

    async def get_all(self) -> List[Dict[str, Any]]:
        """전체 레시피 집계 (recipe_id 오름차순)"""
        logger.debug("전체 레시피 조회 시작")
        recipe_rows = (await self.db.execute(
            text(_RECIPE_JOIN_SELECT + " ORDER BY r.recipe_id, ri.recipe_ingredient_id")
        )).mappings().all()
        step_rows = (await self.db.execute(text(
            "SELECT recipe_id, step_number, instruction FROM recipe_steps ORDER BY recipe_id, step_number"
        ))).mappings().all()

        recipes = group_recipe_rows(recipe_rows, step_rows)
        logger.info(f"전체 레시피 조회 완료: 레시피 수={len(recipes)}")
        return recipes

    async def get_by_id(self, recipe_id: int) -> Optional[Dict[str, Any]]:
        """단일 레시피 집계, 없으면 None"""
        logger.debug(f"레시피 상세 조회 시작: recipe_id={recipe_id}")
        recipe_rows = (await self.db.execute(
            text(_RECIPE_JOIN_SELECT + " WHERE r.recipe_id = :recipe_id ORDER BY r.recipe_id, ri.recipe_ingredient_id"),
            {"recipe_id": recipe_id},
        )).mappings().all()

        if not recipe_rows:
            logger.warning(f"레시피를 찾을 수 없음: recipe_id={recipe_id}")
            return None

        step_rows = (await self.db.execute(
            text(
                "SELECT recipe_id, step_number, instruction FROM recipe_steps "
                "WHERE recipe_id = :recipe_id ORDER BY step_number"
            ),
            {"recipe_id": recipe_id},
        )).mappings().all()

        recipe = group_recipe_rows(recipe_rows, step_rows)[0]
        logger.info(
            f"레시피 상세 조회 완료: recipe_id={recipe_id}, "
            f"재료 개수={len(recipe['ingredients'])}, 단계 개수={len(recipe['steps'])}"
        )
        return recipe

    async def get_by_user(self, user_id: int) -> Optional[List[Dict[str, Any]]]:
        """
        사용자 소유 레시피 집계 목록
        - 레시피가 하나도 없으면 빈 리스트가 아니라 None (라우터에서 404 로 응답)
        """
        logger.debug(f"사용자 레시피 조회 시작: user_id={user_id}")
        recipe_rows = (await self.db.execute(
            text(_RECIPE_JOIN_SELECT + " WHERE r.user_id = :user_id ORDER BY r.recipe_id, ri.recipe_ingredient_id"),
            {"user_id": user_id},
        )).mappings().all()

        if not recipe_rows:
            logger.info(f"사용자 레시피 없음: user_id={user_id}")
            return None

        step_rows = (await self.db.execute(
            text(
                "SELECT recipe_id, step_number, instruction FROM recipe_steps "
                "WHERE recipe_id IN (SELECT recipe_id FROM recipes WHERE user_id = :user_id) "
                "ORDER BY recipe_id, step_number"
            ),
            {"user_id": user_id},
        )).mappings().all()

        recipes = group_recipe_rows(recipe_rows, step_rows)
        logger.info(f"사용자 레시피 조회 완료: user_id={user_id}, 레시피 수={len(recipes)}")
        return recipes

    async def get_image_url(self, recipe_id: int) -> Optional[Dict[str, Any]]:
        """이미지 URL 조회 - 레시피가 없으면 None, 있으면 {"image_url": ...}"""
        row = (await self.db.execute(
            text("SELECT image_url FROM recipes WHERE recipe_id = :recipe_id"),
            {"recipe_id": recipe_id},
        )).mappings().first()
        return dict(row) if row is not None else None

    # ------------------------------------------------------------------
    # 쓰기
    # ------------------------------------------------------------------

    async def create(
        self,
        *,
        recipe_name: str,
        user_id: Optional[int],
        image_url: Optional[str] = None,
        cooking_time: Optional[int] = None,
        description: Optional[str] = None,
        difficulty: Optional[str] = None,
        ingredients: Sequence[Mapping[str, Any]] = (),
        steps: Sequence[Mapping[str, Any]] = (),
    ) -> int:
        """
        레시피 + 재료 + 단계 생성 (단일 트랜잭션)
        - 빈 ingredients / steps 는 해당 INSERT 생략
        - 어느 단계에서든 실패하면 레시피 행까지 모두 롤백 후 예외 전파
        """
        logger.info(
            f"레시피 생성 시작: recipe_name={recipe_name}, user_id={user_id}, "
            f"재료={len(ingredients)}개, 단계={len(steps)}개"
        )
        try:
            result = await self.db.execute(text(INSERT_RECIPE_SQL), {
                "recipe_name": recipe_name,
                "user_id": user_id,
                "image_url": image_url,
                "cooking_time": cooking_time,
                "description": description,
                "difficulty": difficulty,
            })
            recipe_id = result.scalar_one()

            if ingredients:
                await self.db.execute(text(INSERT_RECIPE_INGREDIENT_SQL), _ingredient_params(recipe_id, ingredients))

            if steps:
                await self.db.execute(text(INSERT_STEP_SQL), _step_params(recipe_id, steps))

            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"레시피 생성 실패, 롤백: recipe_name={recipe_name}, error={str(e)}")
            raise

        logger.info(f"레시피 생성 완료: recipe_id={recipe_id}")
        return recipe_id

    async def update(
        self,
        recipe_id: int,
        *,
        recipe_name: str,
        image_url: Optional[str] = None,
        cooking_time: Optional[int] = None,
        description: Optional[str] = None,
        difficulty: Optional[str] = None,
        ingredients: Sequence[Mapping[str, Any]] = (),
        steps: Sequence[Mapping[str, Any]] = (),
    ) -> bool:
        """
        레시피 전체 수정 (단일 트랜잭션)
        - 스칼라 5개 필드는 무조건 덮어씀
        - 재료/단계는 기존 행 전부 삭제 후 전달받은 목록으로 교체
        - 레시피가 없으면 False (자식 테이블 작업 생략)
        """
        logger.info(f"레시피 수정 시작: recipe_id={recipe_id}")
        try:
            result = await self.db.execute(
                text(
                    "UPDATE recipes SET recipe_name = :recipe_name, image_url = :image_url, "
                    "cooking_time = :cooking_time, description = :description, difficulty = :difficulty "
                    "WHERE recipe_id = :recipe_id"
                ),
                {
                    "recipe_name": recipe_name,
                    "image_url": image_url,
                    "cooking_time": cooking_time,
                    "description": description,
                    "difficulty": difficulty,
                    "recipe_id": recipe_id,
                },
            )
            if result.rowcount == 0:
                await self.db.rollback()
                logger.warning(f"수정할 레시피 없음: recipe_id={recipe_id}")
                return False

            await self.db.execute(
                text("DELETE FROM recipe_ingredients WHERE recipe_id = :recipe_id"), {"recipe_id": recipe_id}
            )
            if ingredients:
                await self.db.execute(text(INSERT_RECIPE_INGREDIENT_SQL), _ingredient_params(recipe_id, ingredients))

            await self.db.execute(
                text("DELETE FROM recipe_steps WHERE recipe_id = :recipe_id"), {"recipe_id": recipe_id}
            )
            if steps:
                await self.db.execute(text(INSERT_STEP_SQL), _step_params(recipe_id, steps))

            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"레시피 수정 실패, 롤백: recipe_id={recipe_id}, error={str(e)}")
            raise

        logger.info(f"레시피 수정 완료: recipe_id={recipe_id}, 재료={len(ingredients)}개, 단계={len(steps)}개")
        return True

    async def delete_by_id(self, recipe_id: int) -> bool:
        """
        레시피 삭제 (단계 -> 재료 연결 -> 레시피 순, 단일 트랜잭션)
        - 레시피 행이 없으면 롤백 후 False
        """
        logger.info(f"레시피 삭제 시작: recipe_id={recipe_id}")
        params = {"recipe_id": recipe_id}
        try:
            await self.db.execute(text("DELETE FROM recipe_steps WHERE recipe_id = :recipe_id"), params)
            await self.db.execute(text("DELETE FROM recipe_ingredients WHERE recipe_id = :recipe_id"), params)
            result = await self.db.execute(text("DELETE FROM recipes WHERE recipe_id = :recipe_id"), params)

            if result.rowcount == 0:
                await self.db.rollback()
                logger.warning(f"삭제할 레시피 없음: recipe_id={recipe_id}")
                return False

            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"레시피 삭제 실패, 롤백: recipe_id={recipe_id}, error={str(e)}")
            raise

        logger.info(f"레시피 삭제 완료: recipe_id={recipe_id}")
        return True

    async def set_image_url(self, recipe_id: int, image_url: str) -> Optional[Dict[str, Any]]:
        """image_url 단일 필드 수정, 수정된 레시피 행 반환 (없으면 None)"""
        try:
            row = (await self.db.execute(
                text(
                    "UPDATE recipes SET image_url = :image_url WHERE recipe_id = :recipe_id "
                    "RETURNING recipe_id, recipe_name, image_url, cooking_time, description, difficulty, user_id"
                ),
                {"image_url": image_url, "recipe_id": recipe_id},
            )).mappings().first()
            if row is None:
                await self.db.rollback()
                return None
            data = dict(row)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"레시피 이미지 URL 수정 실패: recipe_id={recipe_id}, error={str(e)}")
            raise

        logger.info(f"레시피 이미지 URL 수정 완료: recipe_id={recipe_id}, image_url={image_url}")
        return data

    # ------------------------------------------------------------------
    # 단계
    # ------------------------------------------------------------------

    async def add_steps(self, recipe_id: int, steps: Sequence[Mapping[str, Any]]) -> int:
        """단계 추가 (기존 단계는 유지), 추가된 개수 반환"""
        try:
            await self.db.execute(text(INSERT_STEP_SQL), _step_params(recipe_id, steps))
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"레시피 단계 추가 실패: recipe_id={recipe_id}, error={str(e)}")
            raise

        logger.info(f"레시피 단계 추가 완료: recipe_id={recipe_id}, 단계={len(steps)}개")
        return len(steps)

    async def update_steps(self, recipe_id: int, steps: Sequence[Mapping[str, Any]]) -> int:
        """
        단계 설명 수정
        - step_number 또는 instruction 이 비어 있는 항목은 건너뜀
        - 실제 갱신된 행 수 반환
        """
        updated = 0
        try:
            for step in steps:
                step_number = step.get("step_number")
                instruction = step.get("instruction")
                if not step_number or not instruction:
                    continue
                result = await self.db.execute(
                    text(
                        "UPDATE recipe_steps SET instruction = :instruction "
                        "WHERE recipe_id = :recipe_id AND step_number = :step_number"
                    ),
                    {"instruction": instruction, "recipe_id": recipe_id, "step_number": step_number},
                )
                updated += result.rowcount
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"레시피 단계 수정 실패: recipe_id={recipe_id}, error={str(e)}")
            raise

        logger.info(f"레시피 단계 수정 완료: recipe_id={recipe_id}, 갱신={updated}건")
        return updated

    async def delete_step(self, recipe_id: int, step_number: int) -> bool:
        """
        단계 하나 삭제 후 뒤따르는 단계 번호를 1씩 당김 (단일 트랜잭션)
        - 예: [1,2,3,4] 에서 2 삭제 -> 3->2, 4->3
        - 삭제된 행이 없으면 재번호 없이 False
        """
        params = {"recipe_id": recipe_id, "step_number": step_number}
        try:
            result = await self.db.execute(
                text("DELETE FROM recipe_steps WHERE recipe_id = :recipe_id AND step_number = :step_number"),
                params,
            )
            if result.rowcount == 0:
                await self.db.rollback()
                logger.warning(f"삭제할 단계 없음: recipe_id={recipe_id}, step_number={step_number}")
                return False

            await self.db.execute(
                text(
                    "UPDATE recipe_steps SET step_number = step_number - 1 "
                    "WHERE recipe_id = :recipe_id AND step_number > :step_number"
                ),
                params,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"레시피 단계 삭제 실패: recipe_id={recipe_id}, step_number={step_number}, error={str(e)}")
            raise

        logger.info(f"레시피 단계 삭제 완료: recipe_id={recipe_id}, step_number={step_number}")
        return True
