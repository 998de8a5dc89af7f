"""
Prometheus 메트릭 엔드포인트 테스트
"""


def test_metrics_records_request_duration(client, make_recipe):
    recipe_id = make_recipe()
    client.get(f"/recipes/{recipe_id}")
    client.get("/recipes/999")

    response = client.get("/metrics")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")

    body = response.text
    assert "# TYPE http_request_duration_ms histogram" in body
    assert 'le="3000.0"' in body
    assert 'http_request_duration_ms_count{code="200",method="GET",route="/recipes/{recipe_id}"}' in body
    assert 'http_request_duration_ms_count{code="404",method="GET",route="/recipes/{recipe_id}"}' in body
    assert 'route="/recipes"' in body


def test_metrics_endpoint_is_not_in_openapi(client):
    assert "/metrics" not in client.get("/openapi.json").json()["paths"]
