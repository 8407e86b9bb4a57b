"""Tests for the Flask API."""

import pytest

from skillcheck.api import app as app_module
from skillcheck.engine.check_manager import SkillCheckManager
from skillcheck.models.record import CheckRecord

from conftest import ScriptedDice


@pytest.fixture
def manager(store, settings_manager):
    """Manager with dice [10, 1, 6, 4] + [6]."""
    return SkillCheckManager(
        dice=ScriptedDice([10, 1, 6, 4], [6]), store=store, settings_manager=settings_manager
    )


@pytest.fixture
def client(manager):
    """Flask test client serving ``manager``."""
    previous = app_module.get_manager()
    app_module.set_manager(manager)
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as client:
        yield client
    app_module.set_manager(previous)


def _create(client, **payload):
    body = {"attribute_dice": 4, "difficulty": 5}
    body.update(payload)
    response = client.post("/api/checks", json=body)
    assert response.status_code == 201
    return response.get_json()["record"]


class TestChecksApi:
    """Check endpoints."""

    def test_perform_check(self, client, store):
        """POST creates and returns a record."""
        record = _create(client, attribute_name="Wits", skill_name="Lie")
        assert record["roll"]["attribute_faces"] == [10, 1, 6, 4]
        assert record["flags"]["cryptomancer"]["check-config"]["difficulty"] == 5
        assert "Solid Success" in record["content"]
        assert store.get(record["record_id"]) is not None

    def test_difficulty_by_name(self, client):
        """Difficulty may be sent by name."""
        record = _create(client, difficulty="tough")
        assert record["flags"]["cryptomancer"]["check-config"]["difficulty"] == 7

    def test_get_check(self, client):
        """GET returns the stored record."""
        record = _create(client)
        response = client.get(f"/api/checks/{record['record_id']}")
        assert response.status_code == 200
        assert CheckRecord.model_validate(response.get_json()["record"]).record_id == record["record_id"]

    def test_get_missing(self, client):
        """Missing records are a JSON 404."""
        response = client.get("/api/checks/missing")
        assert response.status_code == 404
        assert response.get_json()["code"] == 404

    def test_requires_json(self, client):
        """Non-JSON bodies are rejected."""
        response = client.post("/api/checks", data="attribute_dice=3")
        assert response.status_code == 400

    def test_invalid_payload(self, client):
        """Payloads failing validation are rejected."""
        response = client.post("/api/checks", json={"attribute_dice": "many"})
        assert response.status_code == 400
        assert response.get_json()["error"] == "Invalid request"

    def test_rejects_huge_attribute_rating(self, client, store):
        """Ratings above ten are refused before any dice are rolled."""
        response = client.post("/api/checks", json={"attribute_dice": 10**9})
        assert response.status_code == 400
        assert store.list_ids() == []

    @pytest.mark.parametrize("direction", ["lower", "left"])
    def test_lower_click(self, client, direction):
        """Lower and the card's left button step difficulty down."""
        record = _create(client)
        response = client.post(
            f"/api/checks/{record['record_id']}/difficulty", json={"direction": direction}
        )
        body = response.get_json()
        assert body["changed"] is True
        assert body["record"]["flags"]["cryptomancer"]["check-config"]["difficulty"] == 3
        assert body["record"]["roll"] == record["roll"]
        assert "Dramatic Success" in body["record"]["content"]

    def test_raise_click_at_tough(self, client):
        """Raising from Tough changes nothing."""
        record = _create(client, difficulty=7)
        response = client.post(
            f"/api/checks/{record['record_id']}/difficulty", json={"direction": "right"}
        )
        body = response.get_json()
        assert body["changed"] is False
        assert body["record"]["content"] == record["content"]

    def test_click_unknown_record(self, client):
        """Clicks on unknown records are a 404."""
        response = client.post("/api/checks/missing/difficulty", json={"direction": "raise"})
        assert response.status_code == 404

    def test_bad_direction(self, client):
        """Unknown directions are rejected."""
        record = _create(client)
        response = client.post(
            f"/api/checks/{record['record_id']}/difficulty", json={"direction": "up"}
        )
        assert response.status_code == 400

    def test_revise(self, client):
        """Partial overrides apply only the fields sent."""
        record = _create(client, skill_name="Lie")
        response = client.post(
            f"/api/checks/{record['record_id']}/revise", json={"skill_break": True}
        )
        body = response.get_json()
        config = body["record"]["flags"]["cryptomancer"]["check-config"]
        assert body["changed"] is True
        assert config["skill_break"] is True
        assert config["skill"] == "Lie"
        assert config["difficulty"] == 5


    def test_revise_rejects_unknown_fields(self, client):
        """Unknown override fields are a 400 and the record is untouched."""
        record = _create(client)
        response = client.post(
            f"/api/checks/{record['record_id']}/revise", json={"skillBreak": True}
        )
        assert response.status_code == 400
        stored = client.get(f"/api/checks/{record['record_id']}").get_json()["record"]
        assert stored["content"] == record["content"]
        assert stored["updated_at"] is None


class TestSettingsApi:
    """Settings endpoints."""

    def test_get_and_update(self, client):
        """Roll mode changes apply to later checks."""
        assert client.get("/api/settings").get_json()["roll_mode"] == "publicroll"

        response = client.put("/api/settings", json={"roll_mode": "gmroll", "gm_recipients": ["gm-7"]})
        assert response.status_code == 200
        assert response.get_json()["roll_mode"] == "gmroll"

        record = _create(client)
        assert record["whisper"] == ["gm-7"]
        assert record["roll_mode"] == "gmroll"

    def test_rejects_bad_settings(self, client):
        """Invalid settings are rejected."""
        response = client.put("/api/settings", json={"roll_mode": "loudroll"})
        assert response.status_code == 400

    @pytest.mark.parametrize("body", [{"pool_size": 9}, {"flag_key": "other"}, {"flag_scope": "other"}])
    def test_pool_and_flag_location_cannot_change(self, client, body):
        """Pool size and flag location are rejected; existing checks stay revisable."""
        record = _create(client)
        response = client.put("/api/settings", json=body)
        assert response.status_code == 400

        response = client.post(
            f"/api/checks/{record['record_id']}/difficulty", json={"direction": "lower"}
        )
        assert response.get_json()["changed"] is True

        fresh = _create(client, attribute_dice=4)
        assert fresh["roll"]["formula"] == "{4d10, 1d6}"

    def test_rejects_non_object_settings(self, client):
        """Settings bodies must be JSON objects."""
        response = client.put("/api/settings", json=["gmroll"])
        assert response.status_code == 400
        assert response.get_json()["code"] == 400
