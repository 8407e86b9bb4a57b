"""Flask API application."""

import logging
from typing import Optional

from flask import Flask, abort, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from skillcheck.api.schemas import CheckOverride, CheckRequest, DifficultyNudge
from skillcheck.config import DEFAULT_LOG_LEVEL, DEFAULT_RECORD_DIR, DEFAULT_USE_JSON_STORE
from skillcheck.engine.check_manager import SkillCheckManager
from skillcheck.engine.dice import DiceRoller
from skillcheck.models.record import CheckRecord
from skillcheck.persistence.record_store import InMemoryRecordStore, JsonRecordStore, RecordStore
from skillcheck.settings import CheckSettings

logging.basicConfig(level=DEFAULT_LOG_LEVEL, format='[%(name)-19s - %(levelname)5s] %(message)s')

app = Flask("flask.skillcheck")


@app.before_request
def log_request_info():
    app.logger.info('Access to: %s from %s (%s)',
        request.url,
        request.headers.get('X-Forwarded-For', request.remote_addr),
        request.headers.get('User-Agent'))


# Error handlers for API routes
@app.errorhandler(HTTPException)
def handle_http_exception(e: HTTPException):
    """Return JSON instead of HTML for HTTP errors in API routes."""
    if request.path.startswith("/api/"):
        response = e.get_response()
        response.data = jsonify(
            {
                "error": e.name,
                "code": e.code,
                "description": e.description,
            }
        ).data
        response.content_type = "application/json"
        return response
    return e


@app.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError):
    """Reject malformed payloads."""
    return jsonify({"error": "Invalid request", "details": e.errors(include_url=False, include_context=False)}), 400


def _create_store() -> RecordStore:
    if DEFAULT_USE_JSON_STORE:
        return JsonRecordStore(DEFAULT_RECORD_DIR)
    return InMemoryRecordStore()


_manager = SkillCheckManager(dice=DiceRoller(), store=_create_store())


def get_manager() -> SkillCheckManager:
    """Get the manager serving API requests."""
    return _manager


def set_manager(manager: SkillCheckManager) -> None:
    """Replace the manager serving API requests (host wiring, tests)."""
    global _manager
    _manager = manager


def _get_json() -> dict:
    if not request.is_json:
        abort(400, description="Content-Type must be application/json")
    return request.get_json() or {}


def _get_record(record_id: str) -> CheckRecord:
    record = _manager.store.get(record_id)
    if record is None:
        abort(404, description=f"Check {record_id} not found")
    return record


def _record_response(record: CheckRecord, changed: Optional[bool] = None):
    payload = {"record": record.model_dump(mode="json")}
    if changed is not None:
        payload["changed"] = changed
    return jsonify(payload)


@app.route("/api/checks", methods=["POST"])
def perform_check():
    """Roll a check and create its record."""
    check = CheckRequest.model_validate(_get_json())
    record = _manager.perform_check(**check.model_dump())
    return _record_response(record), 201


@app.route("/api/checks/<record_id>", methods=["GET"])
def get_check(record_id: str):
    """Get a check record."""
    return _record_response(_get_record(record_id))


@app.route("/api/checks/<record_id>/difficulty", methods=["POST"])
def nudge_difficulty(record_id: str):
    """Handle a lower/raise click on a chat card."""
    nudge = DifficultyNudge.model_validate(_get_json())
    _get_record(record_id)

    if nudge.is_lower:
        updated = _manager.lower_difficulty_by_id(record_id)
    else:
        updated = _manager.raise_difficulty_by_id(record_id)

    if updated is None:
        return _record_response(_get_record(record_id), changed=False)
    return _record_response(updated, changed=True)


@app.route("/api/checks/<record_id>/revise", methods=["POST"])
def revise_check(record_id: str):
    """Re-resolve a check with part of its configuration replaced."""
    override = CheckOverride.model_validate(_get_json())
    record = _get_record(record_id)

    updated = _manager.revise_check(record, override.model_dump(exclude_unset=True))
    if updated is None:
        return _record_response(record, changed=False)
    return _record_response(updated, changed=True)


@app.route("/api/settings", methods=["GET"])
def get_settings():
    """Get check settings."""
    return jsonify(_manager.settings.config.model_dump(mode="json"))


@app.route("/api/settings", methods=["PUT"])
def update_settings():
    """Update check settings, e.g. the roll privacy mode."""
    data = _get_json()
    if not isinstance(data, dict):
        abort(400, description="Settings must be a JSON object")
    current = _manager.settings.config.model_dump()
    new_config = CheckSettings.model_validate({**current, **data})
    _manager.settings.update_config(new_config)
    app.logger.info(f"Settings updated: roll mode {new_config.roll_mode.value}")
    return jsonify(new_config.model_dump(mode="json"))


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000)
