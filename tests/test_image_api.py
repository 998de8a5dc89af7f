"""
레시피 이미지 업로드/조회 API 테스트
"""
import re

import pytest

from services.recipe.routers.image_router import build_image_filename


def test_build_image_filename_keeps_extension():
    assert re.fullmatch(r"recipe_\d+\.png", build_image_filename("dish.PNG"))
    assert re.fullmatch(r"recipe_\d+", build_image_filename(None))


def test_upload_sets_image_url(client, make_recipe, test_env):
    recipe_id = make_recipe()
    response = client.post(
        f"/recipes/{recipe_id}/upload-image",
        files={"image": ("dish.jpg", b"fake-jpeg-bytes", "image/jpeg")},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Image uploaded successfully"
    image_url = body["data"]["image_url"]
    assert re.fullmatch(r"/food_image/recipe_\d+\.jpg", image_url)

    stored = test_env / "food_image" / image_url.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"fake-jpeg-bytes"

    assert client.get(f"/recipes/{recipe_id}/image").json() == {"imageUrl": image_url}
    assert client.get(f"/recipes/{recipe_id}").json()["image_url"] == image_url


def test_upload_without_file_is_400(client, make_recipe):
    recipe_id = make_recipe()
    response = client.post(f"/recipes/{recipe_id}/upload-image")
    assert response.status_code == 400
    assert response.json() == {"error": "No image uploaded"}


def test_upload_for_missing_recipe_removes_file(client, test_env):
    response = client.post(
        "/recipes/404/upload-image",
        files={"image": ("dish.jpg", b"bytes", "image/jpeg")},
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Recipe not found"}
    assert list((test_env / "food_image").glob("recipe_*")) == []


def test_image_url_is_null_before_upload(client, make_recipe):
    recipe_id = make_recipe()
    assert client.get(f"/recipes/{recipe_id}/image").json() == {"imageUrl": None}


def test_image_url_for_missing_recipe_is_404(client):
    assert client.get("/recipes/404/image").status_code == 404


@pytest.mark.parametrize("run", [1, 2])
def test_uploaded_image_is_served_from_returned_url(client, make_recipe, run):
    """앱을 새 설정으로 다시 띄워도 업로드 URL 로 바로 조회 가능"""
    recipe_id = make_recipe()
    content = f"png-bytes-{run}".encode()
    response = client.post(
        f"/recipes/{recipe_id}/upload-image",
        files={"image": ("dish.png", content, "image/png")},
    )
    image_url = response.json()["data"]["image_url"]

    served = client.get(image_url)
    assert served.status_code == 200
    assert served.content == content
