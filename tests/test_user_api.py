"""
User / 로그인 API 테스트
"""
import re

import pytest


@pytest.fixture
def user_payload():
    return {
        "name": "Somchai",
        "email": "somchai@example.com",
        "password": "secret123",
        "bio": "home cook",
    }


@pytest.fixture
def user_id(client, user_payload):
    response = client.post("/users", json=user_payload)
    assert response.status_code == 201
    return client.get("/users").json()[0]["user_id"]


def test_create_user(client, user_payload):
    response = client.post("/users", json=user_payload)
    assert response.status_code == 201
    assert response.json() == {"message": "User created successfully"}

    users = client.get("/users").json()
    assert len(users) == 1
    assert users[0]["email"] == "somchai@example.com"
    assert users[0]["recipe_count"] == 0
    assert users[0]["join_date"] is not None
    assert "password" not in users[0]
    assert "password_hash" not in users[0]


def test_create_user_duplicate_email_is_409(client, user_payload, user_id):
    response = client.post("/users", json=user_payload)
    assert response.status_code == 409
    assert response.json() == {"error": "Email already registered"}


def test_create_user_missing_fields_is_400(client):
    response = client.post("/users", json={"email": "nobody@example.com"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


def test_get_user(client, user_id):
    response = client.get(f"/users/{user_id}")
    assert response.status_code == 200
    assert response.json()["name"] == "Somchai"
    assert response.json()["role_name"] is None


def test_get_missing_user_is_404(client):
    response = client.get("/users/999")
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_patch_user_updates_only_given_fields(client, user_id):
    response = client.patch(f"/users/{user_id}", json={"bio": "pro chef", "recipe_count": 3})
    assert response.status_code == 200
    assert response.json() == {"message": "User updated successfully"}

    user = client.get(f"/users/{user_id}").json()
    assert user["bio"] == "pro chef"
    assert user["recipe_count"] == 3
    assert user["name"] == "Somchai"


def test_patch_user_empty_body_is_400(client, user_id):
    response = client.patch(f"/users/{user_id}", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "No fields provided for update"}


def test_patch_missing_user_is_404(client):
    assert client.patch("/users/999", json={"bio": "x"}).status_code == 404


def test_patch_password_rehashes(client, user_id):
    client.patch(f"/users/{user_id}", json={"password": "newpass99"})

    old = client.post("/login", json={"email": "somchai@example.com", "password": "secret123"})
    new = client.post("/login", json={"email": "somchai@example.com", "password": "newpass99"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_delete_user(client, user_id):
    response = client.delete(f"/users/{user_id}")
    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully"}
    assert client.get(f"/users/{user_id}").status_code == 404
    assert client.delete(f"/users/{user_id}").status_code == 404


def test_login_success_returns_user(client, user_id):
    response = client.post("/login", json={"email": "somchai@example.com", "password": "secret123"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["user_id"] == user_id
    assert "password_hash" not in body["user"]


@pytest.mark.parametrize("email,password", [
    ("somchai@example.com", "wrong-password"),
    ("stranger@example.com", "secret123"),
])
def test_login_failure_is_401(client, user_id, email, password):
    response = client.post("/login", json={"email": email, "password": password})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}


def test_upload_profile_image(client, user_id, test_env):
    response = client.post(
        f"/users/{user_id}/upload-profile-image",
        files={"profile_image": ("me.png", b"png-bytes", "image/png")},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Profile image uploaded successfully"
    image_url = body["imageUrl"]
    assert re.fullmatch(rf"/profile_image/user_{user_id}_\d+\.png", image_url)

    assert client.get(f"/users/{user_id}").json()["profile_image_url"] == image_url
    assert (test_env / "profile_image" / image_url.rsplit("/", 1)[1]).read_bytes() == b"png-bytes"

    served = client.get(image_url)
    assert served.status_code == 200
    assert served.content == b"png-bytes"


def test_upload_profile_image_without_file_is_400(client, user_id):
    response = client.post(f"/users/{user_id}/upload-profile-image")
    assert response.status_code == 400
    assert response.json() == {"error": "No image file uploaded"}


def test_upload_profile_image_rejects_other_types(client, user_id):
    response = client.post(
        f"/users/{user_id}/upload-profile-image",
        files={"profile_image": ("me.gif", b"gif-bytes", "image/gif")},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Only JPEG and PNG images are allowed"}


def test_upload_profile_image_rejects_large_file(client, user_id):
    response = client.post(
        f"/users/{user_id}/upload-profile-image",
        files={"profile_image": ("me.jpg", b"x" * 2048, "image/jpeg")},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "File too large"}


def test_upload_profile_image_for_missing_user_is_404(client, test_env):
    response = client.post(
        "/users/999/upload-profile-image",
        files={"profile_image": ("me.jpg", b"jpeg-bytes", "image/jpeg")},
    )
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}
    assert list((test_env / "profile_image").glob("user_*")) == []
