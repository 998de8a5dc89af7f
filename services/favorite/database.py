"""
Favorite 서비스 DB 세션 관리 (Async)
"""

from common.database.session import close_database, open_database, state_db_dependency
from services.favorite.models.favorite_model import Base

STATE_KEY = "favorite_db"

get_favorite_db = state_db_dependency(STATE_KEY)


async def open_favorite_db(app, settings):
    return await open_database(app, STATE_KEY, settings.favorite_database_url, settings, Base.metadata)


async def close_favorite_db(app):
    await close_database(app, STATE_KEY)
