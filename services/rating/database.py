"""
Rating 서비스 DB 세션 관리 (Async)
"""

from common.database.session import close_database, open_database, state_db_dependency
from services.rating.models.rating_model import Base

STATE_KEY = "rating_db"

get_rating_db = state_db_dependency(STATE_KEY)


async def open_rating_db(app, settings):
    return await open_database(app, STATE_KEY, settings.rating_database_url, settings, Base.metadata)


async def close_rating_db(app):
    await close_database(app, STATE_KEY)
