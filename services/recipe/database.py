"""
레시피 서비스 전용 DB 세션 관리
- 엔진은 lifespan 에서 open_recipe_db 로 생성, close_recipe_db 로 반환
- get_recipe_db: FastAPI dependency (요청 단위 AsyncSession)
"""

from common.database.session import close_database, open_database, state_db_dependency
from services.recipe.models.recipe_model import Base

STATE_KEY = "recipe_db"

get_recipe_db = state_db_dependency(STATE_KEY)


async def open_recipe_db(app, settings):
    return await open_database(app, STATE_KEY, settings.recipe_database_url, settings, Base.metadata)


async def close_recipe_db(app):
    await close_database(app, STATE_KEY)
