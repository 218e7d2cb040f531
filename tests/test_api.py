import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient

from goldenhour.main import app

client = TestClient(app)

NYC = {"latitude": 40.7128, "longitude": -74.0060, "timezone": "America/New_York"}


def test_health_endpoint():
    """Test health endpoint returns 200"""
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_golden_hour_new_york():
    response = client.post("/api/v1/golden-hour", json={**NYC, "date": "2024-06-21"})
    assert response.status_code == 200
    data = response.json()
    assert data["date"] == "2024-06-21"
    assert data["day_condition"] == "normal"
    assert data["sunrise_local"] in {"05:23", "05:24", "05:25", "05:26", "05:27"}
    assert data["sunset_local"] in {"20:29", "20:30", "20:31", "20:32", "20:33"}
    for key in ("golden_hour_morning", "golden_hour_evening", "blue_hour_morning", "blue_hour_evening"):
        assert data[key] is not None, f"{key} should be present"
        assert data[key]["duration_minutes"] > 0
        assert data[key]["quality"] in {"excellent", "good", "fair", "poor"}
        assert 0 <= data[key]["intensity"] <= 100
    assert data["golden_hour_evening"]["intensity"] == 90
    assert data["solar_noon_light"] == "harsh"


def test_golden_hour_defaults_to_today():
    response = client.post("/api/v1/golden-hour", json=NYC)
    assert response.status_code == 200
    assert response.json()["timezone"] == "America/New_York"


def test_golden_hour_polar_day():
    payload = {"latitude": 78.0, "longitude": 15.6, "timezone": "Arctic/Longyearbyen", "date": "2024-06-21"}
    response = client.post("/api/v1/golden-hour", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["day_condition"] == "polar_day"
    assert data["sunrise"] is None
    assert data["golden_hour_morning"] is None
    assert "sunrise" in data["missing_events"]


def test_golden_hour_invalid_latitude():
    response = client.post("/api/v1/golden-hour", json={"latitude": 100, "longitude": 0})
    assert response.status_code == 422


def test_golden_hour_invalid_timezone():
    response = client.post("/api/v1/golden-hour", json={"latitude": 0, "longitude": 0, "timezone": "Nowhere/Land"})
    assert response.status_code == 400


def test_golden_hour_invalid_date():
    response = client.post("/api/v1/golden-hour", json={"latitude": 0, "longitude": 0, "date": "2024-13-45"})
    assert response.status_code == 400
    assert "Invalid date" in response.json()["detail"]


def test_next_window_rolls_to_tomorrow():
    payload = {
        "latitude": 51.5074,
        "longitude": -0.1278,
        "timezone": "Europe/London",
        "now": "2024-06-21T23:59:00+01:00",
    }
    response = client.post("/api/v1/golden-hour/next", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["date"] == "2024-06-22"
    assert data["kind"] == "morning_blue"
    assert data["label"] == "Morning Blue Hour"
    assert data["phase"] == "upcoming"
    assert data["countdown"].startswith("In ")
    assert data["exhausted"] is False


def test_next_window_golden_only():
    payload = {**NYC, "now": "2024-06-21T12:00:00-04:00", "golden_only": True}
    response = client.post("/api/v1/golden-hour/next", json=payload)
    assert response.status_code == 200
    assert response.json()["kind"] == "evening_golden"


def test_sun_position_daytime():
    payload = {**NYC, "timestamp": "2024-06-21T16:57:00Z"}
    response = client.post("/api/v1/sun-position", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["altitude_deg"] > 70
    assert data["light_quality"] == "harsh"
    assert data["local_time"] == "12:57:00"
    assert data["shadow"]["length"] is not None


def test_sun_position_night():
    payload = {**NYC, "timestamp": "2024-06-21T04:00:00Z"}
    response = client.post("/api/v1/sun-position", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["is_daylight"] is False
    assert data["shadow"]["length"] is None
    assert data["shadow"]["description"] == "No shadow"


def test_next_window_current_after_midnight():
    payload = {
        "latitude": 59.9139,
        "longitude": 10.7522,
        "timezone": "Europe/Oslo",
        "now": "2024-06-22T00:10:00+02:00",
    }
    response = client.post("/api/v1/golden-hour/next", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["date"] == "2024-06-21"
    assert data["kind"] == "evening_blue"
    assert data["phase"] == "current"
    assert data["countdown"].startswith("NOW!")
    assert data["window"]["quality"] in {"excellent", "good", "fair", "poor"}
