"""레시피 서비스 의존성 주입"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from services.recipe.crud.recipe_crud import RecipeRepository
from services.recipe.database import get_recipe_db


def get_recipe_repository(db: AsyncSession = Depends(get_recipe_db)) -> RecipeRepository:
    return RecipeRepository(db)
