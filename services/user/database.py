"""
User 서비스 DB 세션 관리 (Async)
"""

from common.database.session import close_database, open_database, state_db_dependency
from services.user.models.user_model import Base

STATE_KEY = "user_db"

get_user_db = state_db_dependency(STATE_KEY)


async def open_user_db(app, settings):
    return await open_database(app, STATE_KEY, settings.user_database_url, settings, Base.metadata)


async def close_user_db(app):
    await close_database(app, STATE_KEY)
