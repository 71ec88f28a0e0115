from __future__ import annotations

import sqlite3
from pathlib import Path

from fastapi.testclient import TestClient

from catalog_api.app.core.config import Settings
from catalog_api.app.core.metrics import MetricsRegistry
from catalog_api.app.main import create_app


USER = {"name": "Ana", "email": "a@x.com", "password": "abcdef"}


def test_user_lifecycle_scenario(client: TestClient, metrics: MetricsRegistry) -> None:
    created = client.post("/v1/users", json=USER)
    assert created.status_code == 201
    user = created.json()
    assert user["id"] == 1
    assert "password" not in user

    conflict = client.post("/v1/users", json={**USER, "name": "Other"})
    assert conflict.status_code == 409
    assert conflict.json()["detail"] == "Email already in use"
    assert client.get("/v1/users").json()["total_elements"] == 1

    updated = client.put("/v1/users/1", json={**USER, "email": "b@x.com"})
    assert updated.status_code == 200
    body = updated.json()
    assert body["email"] == "b@x.com"
    assert body["created_at"] == user["created_at"]
    assert body["updated_at"] is not None

    assert client.delete("/v1/users/1").status_code == 204
    assert client.get("/v1/users/1").status_code == 404
    second_delete = client.delete("/v1/users/1")
    assert second_delete.status_code == 404
    assert second_delete.json()["detail"] == "User not found"

    assert metrics.get("users.created.total") == 1
    assert metrics.get("users.email_conflict.total") == 1
    assert metrics.get("users.updated.total") == 1
    assert metrics.get("users.deleted.total") == 1
    assert metrics.get("users.not_found.total") == 2


def test_user_validation_errors_are_bad_requests(client: TestClient) -> None:
    response = client.post("/v1/users", json={"name": "", "email": "nope", "password": "abc"})

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation failed"
    fields = {error["field"]: error["message"] for error in body["errors"]}
    assert set(fields) == {"name", "email", "password"}
    assert fields["name"] == "Name is required"
    assert fields["password"] == "Password must be at least 6 characters long"


def test_delete_with_non_positive_id_is_bad_request(client: TestClient) -> None:
    response = client.delete("/v1/users/0")

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid user ID"


def test_list_users_pagination_and_filter(client: TestClient) -> None:
    for index, name in enumerate(["Ana", "Mariana", "Bruno"]):
        client.post("/v1/users", json={"name": name, "email": f"u{index}@x.com", "password": "abcdef"})

    page = client.get("/v1/users", params={"page": 0, "size": 2}).json()
    assert page["total_elements"] == 3
    assert page["total_pages"] == 2
    assert page["size"] == 2
    assert [u["name"] for u in page["content"]] == ["Ana", "Mariana"]

    filtered = client.get("/v1/users", params={"name": "ana"}).json()
    assert [u["name"] for u in filtered["content"]] == ["Ana", "Mariana"]


def test_page_size_is_bounded(client: TestClient) -> None:
    assert client.get("/v1/users", params={"size": 0}).status_code == 400
    assert client.get("/v1/users", params={"page": -1}).status_code == 400


def test_product_scenario_defaults_quantity(client: TestClient) -> None:
    created = client.post("/v1/products", json={"name": "Widget", "price": "9.99"})

    assert created.status_code == 201
    product = created.json()
    assert product["quantity"] == 0
    assert product["price"] == "9.99"

    fetched = client.get(f"/v1/products/{product['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == product


def test_product_update_and_delete(client: TestClient) -> None:
    product = client.post(
        "/v1/products",
        json={"name": "Widget", "price": 9.99, "quantity": 4, "category": "Tools"},
    ).json()

    replaced = client.put(f"/v1/products/{product['id']}", json={"name": "Widget v2", "price": 11.5})
    assert replaced.status_code == 200
    assert replaced.json()["quantity"] == 0
    assert replaced.json()["category"] is None

    assert client.put("/v1/products/999", json={"name": "X", "price": 1}).status_code == 404
    assert client.delete("/v1/products/-1").status_code == 400
    assert client.delete(f"/v1/products/{product['id']}").status_code == 204
    assert client.delete(f"/v1/products/{product['id']}").status_code == 404


def test_product_validation(client: TestClient) -> None:
    response = client.post("/v1/products", json={"name": "Widget", "price": 0, "quantity": -2})

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert fields == {"price", "quantity"}


def test_request_ids_are_echoed_or_generated(client: TestClient) -> None:
    echoed = client.get("/v1/products", headers={"X-Request-ID": "req-1", "X-Correlation-ID": "corr-1"})
    generated = client.get("/v1/products")

    assert echoed.headers["X-Request-ID"] == "req-1"
    assert echoed.headers["X-Correlation-ID"] == "corr-1"
    assert generated.headers["X-Request-ID"]
    assert generated.headers["X-Correlation-ID"]


def test_metrics_endpoint(client: TestClient) -> None:
    client.post("/v1/products", json={"name": "Widget", "price": 1})

    metrics = client.get("/v1/metrics").json()

    assert metrics["products.created.total"] == 1
    assert metrics["users.created.total"] == 0


def test_store_outage_is_service_unavailable_and_alerts(client: TestClient, app, metrics: MetricsRegistry) -> None:
    with sqlite3.connect(app.state.database_path) as conn:
        conn.execute("DROP TABLE users")

    response = client.get("/v1/users")

    assert response.status_code == 503
    assert metrics.get("alerts.triggered.total") == 1
    assert metrics.get("alerts.triggered.database_connection") == 1


def test_price_round_trips_exactly(client: TestClient) -> None:
    created = client.post("/v1/products", json={"name": "Big", "price": "12345678901234567.89"}).json()

    fetched = client.get(f"/v1/products/{created['id']}").json()

    assert created["price"] == "12345678901234567.89"
    assert fetched["price"] == "12345678901234567.89"


def test_page_far_beyond_the_end_is_empty(client: TestClient) -> None:
    client.post("/v1/users", json=USER)

    response = client.get("/v1/users", params={"page": 10**19})

    assert response.status_code == 200
    body = response.json()
    assert body["content"] == []
    assert body["total_elements"] == 1


def test_id_beyond_integer_range_is_not_found(client: TestClient) -> None:
    huge = 10**19

    assert client.get(f"/v1/products/{huge}").status_code == 404
    assert client.put(f"/v1/users/{huge}", json=USER).status_code == 404
    assert client.delete(f"/v1/users/{huge}").status_code == 404


def test_page_size_limits_come_from_app_settings(tmp_path: Path) -> None:
    cfg = Settings(database_url=str(tmp_path / "limits.sqlite3"), default_page_size=2, max_page_size=3)

    with TestClient(create_app(cfg, metrics=MetricsRegistry())) as client:
        assert client.get("/v1/products").json()["size"] == 2
        assert client.get("/v1/products", params={"size": 3}).status_code == 200

        too_big = client.get("/v1/products", params={"size": 4})
        assert too_big.status_code == 400
        assert [error["field"] for error in too_big.json()["errors"]] == ["size"]


def test_single_counter_with_description(client: TestClient) -> None:
    client.post("/v1/users", json=USER)

    counter = client.get("/v1/metrics/users.created.total")
    missing = client.get("/v1/metrics/no.such.counter")

    assert counter.json() == {
        "name": "users.created.total",
        "value": 1,
        "description": "Total number of users created",
    }
    assert missing.status_code == 404
