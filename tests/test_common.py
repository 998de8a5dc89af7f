"""
공통 모듈 테스트 (설정, 에러 응답 형태, 로거)
"""
import json
import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from common.config import Settings, get_settings
from common.errors import (
    BadRequestException,
    InternalServerErrorException,
    NotFoundException,
    register_exception_handlers,
)
from common.logger import JSONFormatter, get_logger


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("RECIPE_DATABASE_URL", "sqlite+aiosqlite:///./recipe.db")
    monkeypatch.setenv("AUTO_CREATE_TABLES", "true")
    monkeypatch.setenv("CORS_ORIGINS", '["http://a.test", "http://b.test"]')
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.recipe_database_url == "sqlite+aiosqlite:///./recipe.db"
        assert settings.auto_create_tables is True
        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert get_settings() is settings
    finally:
        get_settings.cache_clear()


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("IMAGE_URL_PREFIX", raising=False)
    monkeypatch.delenv("USER_DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.image_url_prefix == "/food_image"
    assert settings.user_database_url.startswith("postgresql+asyncpg://")


def _error_app():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/missing")
    async def missing():
        raise NotFoundException("Recipe not found")

    @app.get("/bad")
    async def bad():
        raise BadRequestException("Steps must be a non-empty array")

    @app.get("/storage")
    async def storage():
        raise InternalServerErrorException("Failed to create recipe", details="boom")

    @app.get("/crash")
    async def crash():
        raise RuntimeError("unexpected")

    @app.get("/items/{item_id}")
    async def item(item_id: int):
        return {"item_id": item_id}

    return app


def test_error_bodies_are_not_wrapped():
    client = TestClient(_error_app(), raise_server_exceptions=False)

    assert client.get("/missing").json() == {"message": "Recipe not found"}
    assert client.get("/bad").status_code == 400
    assert client.get("/bad").json() == {"error": "Steps must be a non-empty array"}
    assert client.get("/storage").json() == {"error": "Failed to create recipe", "details": "boom"}

    crashed = client.get("/crash")
    assert crashed.status_code == 500
    assert crashed.json() == {"error": "Internal server error"}


def test_validation_error_is_400():
    client = TestClient(_error_app())
    response = client.get("/items/not-a-number")
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request"
    assert body["details"][0]["loc"] == ["path", "item_id"]


def test_json_formatter_includes_context():
    record = logging.LogRecord("recipe_crud", logging.INFO, __file__, 1, "레시피 생성 완료", None, None)
    record.extra_fields = {"recipe_id": 3}
    payload = json.loads(JSONFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "recipe_crud"
    assert payload["message"] == "레시피 생성 완료"
    assert payload["recipe_id"] == 3


def test_get_logger_reuses_handler():
    first = get_logger("test_common_logger")
    second = get_logger("test_common_logger")
    assert first is second
    assert len(second.handlers) == 1
