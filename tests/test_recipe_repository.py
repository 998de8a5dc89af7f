"""
RecipeRepository 단위 테스트 (AsyncSession 직접 사용)
"""
from contextlib import asynccontextmanager

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from common.database.session import DatabaseSessionManager
from services.recipe.crud.recipe_crud import RecipeRepository, group_recipe_rows
from services.recipe.models.recipe_model import Base


@asynccontextmanager
async def repository(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'repo.db'}", name="test_recipe_db")
    await manager.create_all(Base.metadata)
    try:
        async with manager.sessionmaker() as session:
            await session.execute(
                text("INSERT INTO ingredients (name, unit) VALUES (:name, :unit)"),
                [{"name": "Egg", "unit": "ea"}, {"name": "Milk", "unit": "ml"}],
            )
            await session.commit()
            yield RecipeRepository(session)
    finally:
        await manager.close()


async def _count(repo, table):
    return (await repo.db.execute(text(f"SELECT COUNT(*) FROM {table}"))).scalar_one()


def test_group_recipe_rows_skips_null_ingredients():
    recipe_rows = [
        {"recipe_id": 1, "recipe_name": "A", "image_url": None, "cooking_time": 5, "description": None,
         "difficulty": "Easy", "user_id": 1, "ingredient_id": None, "ingredient_name": None,
         "unit": None, "quantity": None},
        {"recipe_id": 2, "recipe_name": "B", "image_url": None, "cooking_time": 5, "description": None,
         "difficulty": "Hard", "user_id": 1, "ingredient_id": 10, "ingredient_name": "Egg",
         "unit": "ea", "quantity": 2},
        {"recipe_id": 2, "recipe_name": "B", "image_url": None, "cooking_time": 5, "description": None,
         "difficulty": "Hard", "user_id": 1, "ingredient_id": 11, "ingredient_name": "Milk",
         "unit": "ml", "quantity": 200},
    ]
    step_rows = [
        {"recipe_id": 2, "step_number": 1, "instruction": "Whisk"},
        {"recipe_id": 3, "step_number": 1, "instruction": "orphan"},
    ]

    recipes = group_recipe_rows(recipe_rows, step_rows)

    assert [r["recipe_id"] for r in recipes] == [1, 2]
    assert recipes[0]["ingredients"] == []
    assert recipes[0]["steps"] == []
    assert [i["ingredient_id"] for i in recipes[1]["ingredients"]] == [10, 11]
    assert recipes[1]["steps"] == [{"step_number": 1, "instruction": "Whisk"}]


@pytest.mark.anyio
async def test_create_and_get_by_id(tmp_path):
    async with repository(tmp_path) as repo:
        recipe_id = await repo.create(
            recipe_name="Omelette",
            user_id=5,
            difficulty="Easy",
            ingredients=[{"ingredient_id": 1, "quantity": 3}],
            steps=[{"step_number": 1, "instruction": "Beat eggs"}, {"step_number": 2, "instruction": "Cook"}],
        )
        recipe = await repo.get_by_id(recipe_id)

    assert recipe["recipe_name"] == "Omelette"
    assert recipe["ingredients"] == [
        {"ingredient_id": 1, "ingredient_name": "Egg", "unit": "ea", "quantity": 3},
    ]
    assert [s["instruction"] for s in recipe["steps"]] == ["Beat eggs", "Cook"]


@pytest.mark.anyio
async def test_create_rolls_back_recipe_row_on_child_failure(tmp_path):
    async with repository(tmp_path) as repo:
        with pytest.raises(IntegrityError):
            await repo.create(
                recipe_name="Broken",
                user_id=1,
                ingredients=[{"ingredient_id": 1, "quantity": None}],
                steps=[{"step_number": 1, "instruction": "x"}],
            )

        assert await _count(repo, "recipes") == 0
        assert await _count(repo, "recipe_ingredients") == 0
        assert await _count(repo, "recipe_steps") == 0


@pytest.mark.anyio
async def test_get_by_user_returns_none_when_empty(tmp_path):
    async with repository(tmp_path) as repo:
        assert await repo.get_by_user(99) is None
        assert await repo.get_all() == []


@pytest.mark.anyio
async def test_update_missing_recipe_skips_children(tmp_path):
    async with repository(tmp_path) as repo:
        assert await repo.update(
            404,
            recipe_name="Ghost",
            ingredients=[{"ingredient_id": 1, "quantity": 1}],
            steps=[{"step_number": 1, "instruction": "x"}],
        ) is False
        assert await _count(repo, "recipe_ingredients") == 0
        assert await _count(repo, "recipe_steps") == 0


@pytest.mark.anyio
async def test_update_is_atomic(tmp_path):
    async with repository(tmp_path) as repo:
        recipe_id = await repo.create(
            recipe_name="Latte",
            user_id=1,
            ingredients=[{"ingredient_id": 2, "quantity": 150}],
            steps=[{"step_number": 1, "instruction": "Steam milk"}],
        )
        with pytest.raises(IntegrityError):
            await repo.update(
                recipe_id,
                recipe_name="Broken latte",
                ingredients=[{"ingredient_id": 777, "quantity": 1}],
            )

        recipe = await repo.get_by_id(recipe_id)

    assert recipe["recipe_name"] == "Latte"
    assert [i["ingredient_id"] for i in recipe["ingredients"]] == [2]
    assert [s["instruction"] for s in recipe["steps"]] == ["Steam milk"]


@pytest.mark.anyio
async def test_delete_by_id_removes_children(tmp_path):
    async with repository(tmp_path) as repo:
        recipe_id = await repo.create(
            recipe_name="Toast",
            user_id=1,
            ingredients=[{"ingredient_id": 1, "quantity": 1}],
            steps=[{"step_number": 1, "instruction": "Toast"}],
        )
        assert await repo.delete_by_id(recipe_id) is True
        assert await repo.get_by_id(recipe_id) is None
        assert await _count(repo, "recipe_ingredients") == 0
        assert await _count(repo, "recipe_steps") == 0
        assert await repo.delete_by_id(recipe_id) is False


@pytest.mark.anyio
async def test_delete_step_renumbers(tmp_path):
    async with repository(tmp_path) as repo:
        recipe_id = await repo.create(
            recipe_name="Cake",
            user_id=1,
            steps=[{"step_number": n, "instruction": f"s{n}"} for n in (1, 2, 3, 4)],
        )
        assert await repo.delete_step(recipe_id, 1) is True
        assert await repo.delete_step(recipe_id, 9) is False
        recipe = await repo.get_by_id(recipe_id)

    assert recipe["steps"] == [
        {"step_number": 1, "instruction": "s2"},
        {"step_number": 2, "instruction": "s3"},
        {"step_number": 3, "instruction": "s4"},
    ]


@pytest.mark.anyio
async def test_set_image_url_returns_row(tmp_path):
    async with repository(tmp_path) as repo:
        recipe_id = await repo.create(recipe_name="Pie", user_id=1)
        row = await repo.set_image_url(recipe_id, "/food_image/pie.png")
        assert row["image_url"] == "/food_image/pie.png"
        assert await repo.set_image_url(404, "/food_image/none.png") is None
        assert await repo.get_image_url(recipe_id) == {"image_url": "/food_image/pie.png"}
