"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from little_ladle.api.app import create_app

PROFILE = {"name": "Sophie", "birth_date": "2025-03-15", "sex": "female"}
TODAY = "2026-01-15"


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container))


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_feeding_modes(client) -> None:
    response = client.get("/feeding-modes")

    modes = {mode["key"]: mode for mode in response.json()["modes"]}
    assert modes["complementary"]["target_compliance"] == 60
    assert modes["full"]["target_compliance"] == 80


def test_get_food(client) -> None:
    response = client.get("/foods/1")

    assert response.status_code == 200
    assert response.json()["short_name"] == "Chicken breast"


def test_get_unknown_food(client) -> None:
    response = client.get("/foods/424242")

    assert response.status_code == 404
    assert "424242" in response.json()["detail"]


def test_compliance(client) -> None:
    response = client.post(
        "/compliance",
        json={
            "profile": PROFILE,
            "meal": [{"food_id": 1, "serving_grams": 10}],
            "today": TODAY,
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["overall_score"] == 48
    assert body["applicable"] is True
    assert body["risk_alerts"][0]["severity"] == "high"


def test_compliance_rejects_zero_serving(client) -> None:
    response = client.post(
        "/compliance",
        json={
            "profile": PROFILE,
            "meal": [{"food_id": 1, "serving_grams": 0}],
            "today": TODAY,
        },
    )

    assert response.status_code == 422


def test_compliance_rejects_future_birth_date(client) -> None:
    response = client.post(
        "/compliance",
        json={
            "profile": {**PROFILE, "birth_date": "2026-06-01"},
            "meal": [],
            "today": TODAY,
        },
    )

    assert response.status_code == 422


def test_recommendations(client) -> None:
    response = client.post(
        "/recommendations",
        json={"profile": PROFILE, "meal": [], "today": TODAY},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["current_meal_score"] == 15
    assert body["mode"]["key"] == "complementary"
    assert [s["suggestion_id"] for s in body["suggestions"]] == ["balanced", "power"]


def test_recommendations_without_profile(client) -> None:
    response = client.post("/recommendations", json={"meal": [], "today": TODAY})

    assert response.status_code == 400


def test_recommendations_with_unknown_mode(client) -> None:
    response = client.post(
        "/recommendations",
        json={"profile": PROFILE, "meal": [], "mode": "keto", "today": TODAY},
    )

    assert response.status_code == 422
    assert "keto" in response.json()["detail"]


def test_add_custom_food(client) -> None:
    payload = {
        "fdcId": 900001,
        "name": "Sweet potato, baked",
        "shortName": "Sweet potato",
        "category": "vegetable",
        "ageGroup": "6+ months",
        "nutrients": {"iron": {"amount": 0.69, "unit": "mg"}},
    }

    created = client.post("/foods", json=payload)
    duplicate = client.post("/foods", json=payload)

    assert created.status_code == 201
    assert created.json()["food_id"] == 900001
    assert client.get("/foods/900001").status_code == 200
    assert duplicate.status_code == 422


def test_asgi_app_uses_packaged_data() -> None:
    from little_ladle.api.asgi import app

    assert len(app.state.container.catalog) == 22
