"""
테스트 공통 fixture
- 서비스별 DB 는 임시 디렉토리의 sqlite 파일 (aiosqlite 드라이버)
- gateway 앱을 TestClient 로 띄우면 lifespan 에서 테이블 생성
"""
import pytest
from fastapi.testclient import TestClient

from common.config import get_settings


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def test_env(tmp_path, monkeypatch):
    for service in ("RECIPE", "USER", "RATING", "FAVORITE"):
        db_path = tmp_path / f"{service.lower()}.db"
        monkeypatch.setenv(f"{service}_DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    image_dir = tmp_path / "food_image"
    monkeypatch.setenv("AUTO_CREATE_TABLES", "true")
    monkeypatch.setenv("IMAGE_DIR", str(image_dir))
    monkeypatch.setenv("PROFILE_IMAGE_DIR", str(tmp_path / "profile_image"))
    monkeypatch.setenv("PROFILE_IMAGE_MAX_BYTES", "1024")
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def client(test_env):
    from gateway.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def ingredients(client):
    """재료 마스터 seed: {이름: ingredient_id}"""
    seeded = {}
    for name, unit in (("Chicken", "g"), ("Flour", "cup"), ("Salt", "tsp")):
        response = client.post("/ingredients", json={"name": name, "unit": unit})
        assert response.status_code == 201
        seeded[name] = response.json()["ingredient_id"]
    return seeded


@pytest.fixture
def make_recipe(client, ingredients):
    """레시피 생성 helper - 생성된 recipe_id 반환"""
    def _make(**overrides):
        payload = {
            "recipe_name": "Fried Chicken",
            "user_id": 1,
            "cooking_time": 40,
            "description": "Crispy",
            "difficulty": "Medium",
            "ingredients": [
                {"ingredient_id": ingredients["Chicken"], "quantity": 500},
                {"ingredient_id": ingredients["Flour"], "quantity": 2},
            ],
            "steps": [
                {"step_number": 1, "instruction": "Coat chicken"},
                {"step_number": 2, "instruction": "Fry"},
            ],
        }
        payload.update(overrides)
        response = client.post("/recipes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["recipe_id"]

    return _make
