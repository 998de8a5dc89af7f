"""
레시피 단계 API 테스트 (/recipes/{id}/steps)
"""


def _steps(client, recipe_id):
    return client.get(f"/recipes/{recipe_id}").json()["steps"]


def test_delete_step_renumbers_following_steps(client, make_recipe):
    recipe_id = make_recipe(steps=[
        {"step_number": 1, "instruction": "a"},
        {"step_number": 2, "instruction": "b"},
        {"step_number": 3, "instruction": "c"},
        {"step_number": 4, "instruction": "d"},
    ])

    response = client.delete(f"/recipes/{recipe_id}/steps/2")
    assert response.status_code == 200
    assert response.json() == {"message": "Step deleted successfully"}
    assert _steps(client, recipe_id) == [
        {"step_number": 1, "instruction": "a"},
        {"step_number": 2, "instruction": "c"},
        {"step_number": 3, "instruction": "d"},
    ]


def test_delete_last_step_keeps_others(client, make_recipe):
    recipe_id = make_recipe()
    client.delete(f"/recipes/{recipe_id}/steps/2")
    assert _steps(client, recipe_id) == [{"step_number": 1, "instruction": "Coat chicken"}]


def test_delete_missing_step_is_404_without_renumbering(client, make_recipe):
    recipe_id = make_recipe()
    response = client.delete(f"/recipes/{recipe_id}/steps/7")
    assert response.status_code == 404
    assert response.json() == {"error": "Step not found"}
    assert [s["step_number"] for s in _steps(client, recipe_id)] == [1, 2]


def test_delete_step_with_invalid_number_is_400(client, make_recipe):
    recipe_id = make_recipe()
    for url in (f"/recipes/{recipe_id}/steps/two", "/recipes/abc/steps/1"):
        response = client.delete(url)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid recipe_id or step_number"}
    assert [s["step_number"] for s in _steps(client, recipe_id)] == [1, 2]


def test_add_steps_appends(client, make_recipe):
    recipe_id = make_recipe()
    response = client.post(f"/recipes/{recipe_id}/steps", json={
        "steps": [{"step_number": 3, "instruction": "Serve"}],
    })
    assert response.status_code == 201
    assert response.json() == {"message": "Steps added successfully"}
    assert [s["instruction"] for s in _steps(client, recipe_id)] == ["Coat chicken", "Fry", "Serve"]


def test_add_empty_steps_is_400(client, make_recipe):
    recipe_id = make_recipe()
    response = client.post(f"/recipes/{recipe_id}/steps", json={"steps": []})
    assert response.status_code == 400
    assert response.json() == {"error": "Steps must be a non-empty array"}


def test_update_steps_skips_incomplete_entries(client, make_recipe):
    recipe_id = make_recipe()
    response = client.patch(f"/recipes/{recipe_id}/steps", json={
        "steps": [
            {"step_number": 2, "instruction": "Deep fry"},
            {"step_number": 1},
            {"instruction": "orphan"},
        ],
    })
    assert response.status_code == 200
    assert response.json() == {"message": "Steps updated successfully"}
    assert _steps(client, recipe_id) == [
        {"step_number": 1, "instruction": "Coat chicken"},
        {"step_number": 2, "instruction": "Deep fry"},
    ]


def test_update_empty_steps_is_400(client, make_recipe):
    recipe_id = make_recipe()
    assert client.patch(f"/recipes/{recipe_id}/steps", json={"steps": []}).status_code == 400
