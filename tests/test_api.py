"""Tests for the HTTP API."""

from datetime import date
from uuid import uuid4

from fastapi.testclient import TestClient

from fitness_tracker.api.app import create_app
from fitness_tracker.domain.daily import DailyLogRow, MealPlanRow
from tests.conftest import (
    FakeCompletionClient,
    InMemoryDailyRepository,
    InMemoryEntryRepository,
)


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse_exercise(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/parse", json={"text": "Bench press 3x8 at 185", "type": "exercise"}
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"exercise": "bench press", "sets": 3, "reps": 8, "weight": 185.0},
    }


def test_parse_meal_reports_quantities(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/parse", json={"text": "200g chicken breast", "type": "meal"})

    data = response.json()["data"]
    assert data["calories"] == 330
    assert data["source"] == "FALLBACK_DB"
    assert data["quantities"] == [
        {"item": "chicken breast", "amount": 200.0, "unit": "g"}
    ]


def test_parse_unmatched_text_asks_to_rephrase(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/parse", json={"text": "did some stuff today", "type": "exercise"}
    )

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["errorType"] == "unparseable_input"
    assert "rephras" in body["error"]
    assert "rawContent" not in body


def test_parse_ai_food(container, completion_client: FakeCompletionClient) -> None:
    completion_client.reply_with(
        {
            "calories": 400,
            "protein": 50,
            "fat": 10,
            "carbs": 0,
            "items": ["chicken breast"],
            "quantities": [{"item": "chicken breast", "amount": 200, "unit": "g"}],
        }
    )
    client = TestClient(create_app(container))

    response = client.post(
        "/parse-ai", json={"inputText": "200g chicken breast", "type": "food"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["source"] == "USDA"
    assert body["data"]["calories"] == 330


def test_parse_ai_without_key_is_config_error(container) -> None:
    container.extraction_service.completion_client = None
    client = TestClient(create_app(container))

    response = client.post("/parse-ai", json={"inputText": "oatmeal", "type": "food"})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "OpenAI API key not configured",
        "errorType": "config_error",
    }


def test_parse_ai_bad_reply_includes_raw_content(
    container, completion_client: FakeCompletionClient
) -> None:
    completion_client.content = "I think that was about 400 calories."
    client = TestClient(create_app(container))

    response = client.post("/parse-ai", json={"inputText": "oatmeal", "type": "food"})

    assert response.status_code == 502
    body = response.json()
    assert body["errorType"] == "format_error"
    assert body["rawContent"] == "I think that was about 400 calories."


def test_parse_ai_schema_error(
    container, completion_client: FakeCompletionClient
) -> None:
    completion_client.reply_with({"exercise_name": "yoga"})
    client = TestClient(create_app(container))

    response = client.post("/parse-ai", json={"inputText": "yoga", "type": "exercise"})

    assert response.status_code == 502
    assert response.json()["errorType"] == "schema_error"


def test_create_weight_entry(
    container, entry_repository: InMemoryEntryRepository
) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()

    response = client.post(
        f"/users/{user_id}/entries",
        json={"text": "214.5 pounds", "type": "weight", "date": "2025-03-14"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["record"] == {"weight": 214.5}
    assert data["entry"]["day"] == "2025-03-14"
    assert f"{user_id}:2025-03-14" in entry_repository.weights


def test_create_entry_with_ai_extraction(
    container,
    entry_repository: InMemoryEntryRepository,
    completion_client: FakeCompletionClient,
) -> None:
    completion_client.reply_with(
        {
            "exercise_name": "running",
            "exercise_type": "cardio",
            "duration_minutes": 30,
            "distance": 3,
            "calories_burned": 300,
        }
    )
    client = TestClient(create_app(container))

    response = client.post(
        f"/users/{uuid4()}/entries",
        json={
            "text": "ran 3 miles in half an hour",
            "type": "cardio",
            "useAi": True,
            "date": "2025-03-14",
        },
    )

    assert response.status_code == 201
    assert entry_repository.exercises[0].calories_burned == 343


def test_create_entry_rejects_unparseable_text(
    container, entry_repository: InMemoryEntryRepository
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/users/{uuid4()}/entries", json={"text": "went for a run", "type": "cardio"}
    )

    assert response.status_code == 422
    assert entry_repository.exercises == []


def test_day_nutrition(container, daily_repository: InMemoryDailyRepository) -> None:
    day = date(2025, 3, 14)
    daily_repository.meal_plans = [
        MealPlanRow("m1", "lunch", {"calories": "500-600", "protein": 40}),
    ]
    daily_repository.daily_logs = {day: [DailyLogRow("m1", "meal", True, None)]}
    client = TestClient(create_app(container))

    response = client.get(f"/users/{uuid4()}/days/2025-03-14/nutrition")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["day"] == "2025-03-14"
    assert data["potential"] == {"calories": 550, "protein": 40, "fat": 0, "carbs": 0}
    assert data["actual"] == data["potential"]
