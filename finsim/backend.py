"""REST backend for account balance projections."""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Any, Dict, List

from flask import Flask, jsonify, request

from finsim.data_model import (
    COMPOUNDING_PERIODS,
    EVENT_FORMULAS,
    INTEREST_FORMULAS,
    RULE_TYPES,
    ProjectFormatError,
    parse_project,
    project_to_document,
    record_to_rule,
)
from finsim.engine.aggregate import FREQUENCIES, aggregate_period, points_to_frame
from finsim.engine.dates import format_date
from finsim.engine.delta import calculate_total_delta
from finsim.engine.simulator import MAX_SIMULATION_DAYS, run_simulation
from finsim.engine.state import ProjectState

app = Flask(__name__)

project_state = ProjectState()

DEFAULT_VIEW_YEARS = 5


def _is_nan(value: Any) -> bool:
    try:
        return isinstance(value, float) and not math.isfinite(value)
    except (TypeError, ValueError):
        return False


def _sanitize_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    clean_rows: List[Dict[str, Any]] = []
    for row in records:
        clean_rows.append({key: (None if _is_nan(value) else value) for key, value in row.items()})
    return clean_rows


def _extract_payload_value(payload: dict, *keys: str, default=None):
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def _bad_request(message: str):
    app.logger.warning("Rejected request to %s: %s", request.path, message)
    return jsonify({"error": message}), 400


@app.after_request
def apply_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET,POST,DELETE,OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


@app.get("/api/health")
def healthcheck():
    return jsonify({"status": "ok"})


@app.get("/api/schema")
def get_schema():
    today = date.today()
    payload = {
        "viewDefaults": {
            "startDate": format_date(today),
            "endDate": format_date(today + timedelta(days=365 * DEFAULT_VIEW_YEARS)),
            "granularity": "M",
        },
        "maxSimulationDays": MAX_SIMULATION_DAYS,
        "ruleTypes": RULE_TYPES,
        "eventFormulas": EVENT_FORMULAS,
        "interestFormulas": INTEREST_FORMULAS,
        "compoundingPeriods": COMPOUNDING_PERIODS,
        "freqOptions": [
            {"label": "Daily", "value": "D"},
            {"label": "Weekly", "value": "W"},
            {"label": "Monthly", "value": "M"},
            {"label": "Quarterly", "value": "Q"},
            {"label": "Yearly", "value": "Y"},
        ],
    }
    return jsonify(payload)


@app.post("/api/simulate")
def simulate():
    payload = request.get_json(silent=True) or {}
    try:
        project = parse_project(payload)
    except ProjectFormatError as exc:
        return _bad_request(str(exc))

    account_id = _extract_payload_value(payload, "accountId", "activeAccountId")
    account = project.get_account(account_id)
    if account is None:
        return _bad_request(f"Unknown account: {account_id!r}")

    start = _extract_payload_value(payload, "startDate")
    end = _extract_payload_value(payload, "endDate")
    if not start or not end:
        return _bad_request("startDate and endDate are required.")

    result = run_simulation(account, project.items, start, end)
    response: Dict[str, Any] = {
        "accountId": account.id,
        "points": [point.to_record() for point in result.points],
        "itemTotals": result.item_totals,
    }

    freq = _extract_payload_value(payload, "freq")
    if freq:
        freq = str(freq).upper()
        if freq not in FREQUENCIES:
            return _bad_request(f"Unknown frequency: {freq}")
        agg_df = aggregate_period(points_to_frame(result.points), freq=freq)
        response["freq"] = freq
        response["aggregated"] = _sanitize_records(agg_df.to_dict(orient="records"))
    return jsonify(response)


@app.post("/api/delta")
def range_delta():
    payload = request.get_json(silent=True) or {}
    item = payload.get("item")
    if not isinstance(item, dict):
        return _bad_request("item must be an object.")
    try:
        rule = record_to_rule(item)
    except ProjectFormatError as exc:
        return _bad_request(str(exc))
    delta = calculate_total_delta(
        rule,
        payload.get("startDate"),
        payload.get("endDate"),
        account_id=payload.get("accountId"),
    )
    return jsonify({"id": rule.id, "delta": delta})


@app.post("/api/import")
def import_project():
    payload = request.get_json(silent=True)
    try:
        project = parse_project(payload)
    except ProjectFormatError as exc:
        return _bad_request(str(exc))
    return jsonify(project_to_document(project))


@app.get("/api/projects")
def list_saved_projects():
    return jsonify({"projects": project_state.list_names()})


@app.get("/api/projects/<project_name>")
def get_project(project_name: str):
    project = project_state.get(project_name)
    if not project:
        return jsonify({"error": "Project not found."}), 404
    return jsonify(project)


@app.post("/api/projects")
def save_project():
    payload = request.get_json(silent=True) or {}
    name = str(payload.get("name", "")).strip()
    if not name:
        return _bad_request("Project name is required.")
    try:
        document = project_state.save(name, payload)
    except ProjectFormatError as exc:
        return _bad_request(str(exc))
    app.logger.info("Saved project %s", name)
    return jsonify({
        "message": "Project saved.",
        "projects": project_state.list_names(),
        "project": document,
    })


@app.delete("/api/projects/<project_name>")
def delete_project(project_name: str):
    if project_state.delete(project_name):
        app.logger.info("Deleted project %s", project_name)
    return jsonify({"message": "Project deleted.", "projects": project_state.list_names()})


if __name__ == "__main__":
    app.run(debug=False, port=8000)
