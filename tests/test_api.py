"""Tests for the HTTP surface."""

from fastapi.testclient import TestClient

from fluid_tracker.api.app import create_app
from fluid_tracker.domain.codec import pack_words
from fluid_tracker.domain.fluids import DEFAULT_COLOR


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_fluids_offers_water(container) -> None:
    client = TestClient(create_app(container))

    data = client.get("/fluids").json()

    assert data["fluids"][0]["name"] == "Water"
    assert data["fluids"][0]["color"] == "#6cf"
    assert data["fluids"][0]["saved_index"] == 0


def test_show_fluid(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/fluids", json={"name": "Tea", "color": "#A52", "hydration": 90}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["position"] == 1
    assert data["color"] == "#a52"
    assert data["hydration"] == 0.9
    assert data["saved_index"] == -1


def test_register_entry_and_view_day(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/entries", json={"fluid_index": 0, "amount": 8})

    assert response.status_code == 201
    assert response.json() == {
        "time": "8:30am",
        "amount": "8.0 oz",
        "fluid": "Water",
        "color": "#6cf",
    }

    day = client.get("/days/2024/2/14").json()
    assert day["day"] == "2024-02-14"
    assert day["has_data"] is True
    assert day["total"] == "8.0 oz"
    assert len(day["entries"]) == 1


def test_register_entry_with_unknown_fluid(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/entries", json={"fluid_index": 5, "amount": 8})

    assert response.status_code == 404


def test_invalid_day_is_not_found(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/days/2023/2/29").status_code == 404


def test_malformed_day_record(container) -> None:
    container.store.set("moist:20240213", pack_words(0, 640, 1))
    client = TestClient(create_app(container))

    response = client.get("/days/2024/2/13")

    assert response.status_code == 422
    assert "Malformed" in response.json()["detail"]


def test_set_goal(container) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/days/2024/2/14/goal", json={"goal": 2000, "is_oz": False}
    )

    assert response.status_code == 200
    assert response.json() == {"goal": 2000.0, "is_oz": False, "total": 0.0}


def test_month_grid(container) -> None:
    client = TestClient(create_app(container))

    data = client.get("/months/2024/2").json()

    assert data["label"] == "February '24"
    assert data["leading_blanks"] == 4
    assert data["rows"][0][0] is None
    assert data["rows"][2][3]["is_today"] is True
    assert data["next"] == {"year": 2024, "month": 3}
    assert data["previous"] == {"year": 2024, "month": 1}


def test_invalid_month_is_not_found(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/months/2024/13").status_code == 404


def test_preferences_round_trip(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/preferences").json() == {
        "use_oz": True,
        "use_meridiem": True,
    }

    response = client.put("/preferences", json={"use_oz": False})

    assert response.json() == {"use_oz": False, "use_meridiem": True}
    assert client.get("/preferences").json() == {
        "use_oz": False,
        "use_meridiem": True,
    }


def test_show_fluid_defaults_to_neutral_gray(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/fluids", json={"name": "Broth", "hydration": 70})

    assert response.status_code == 201
    assert response.json()["color"] == DEFAULT_COLOR
