import json
import logging
import math

import pytest

from finsim.backend import _sanitize_records
from finsim.data_model import EventRule, ProjectFormatError
from finsim.engine.state import ProjectState
from finsim.engine.storage import _sanitize_json_compat, load_projects, save_projects


def test_sanitize_json_compat_replaces_special_numbers():
    payload = {
        "float": math.nan,
        "list": [1, float("inf"), -float("inf")],
        "nested": {"value": math.nan},
    }

    clean = _sanitize_json_compat(payload)

    assert clean == {
        "float": None,
        "list": [1, None, None],
        "nested": {"value": None},
    }


def test_save_projects_persists_sanitized_values(tmp_path):
    path = tmp_path / "projects.json"
    data = {"Plan": {"value": math.nan, "items": [1, float("inf")]}}

    save_projects(str(path), data)

    with path.open("r", encoding="utf-8") as handle:
        stored = json.load(handle)

    assert stored == {"Plan": {"value": None, "items": [1, None]}}
    assert not (tmp_path / "projects.json.tmp").exists()


def test_load_projects_tolerates_missing_and_corrupt_files(tmp_path, caplog):
    missing = tmp_path / "nope.json"
    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{not json", encoding="utf-8")
    empty = tmp_path / "empty.json"
    empty.write_text("   ", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        assert load_projects(str(missing)) == {}
        assert load_projects(str(corrupt)) == {}
        assert load_projects(str(empty)) == {}

    assert "Could not read saved projects" in caplog.text


def test_project_state_round_trips_through_disk(tmp_path):
    path = str(tmp_path / "nested" / "projects.json")
    state = ProjectState(path)
    state.save("Budget", {"version": 1, "accounts": [], "items": []})
    state.save("Alpha", {"version": 1, "accounts": [], "items": []})

    reloaded = ProjectState(path)

    assert reloaded.list_names() == ["Alpha", "Budget"]
    assert reloaded.get("Budget") == {"version": 1, "accounts": [], "items": []}
    assert reloaded.delete("Alpha")
    assert not reloaded.delete("Alpha")
    assert ProjectState(path).list_names() == ["Budget"]


def test_project_state_normalises_saved_documents(tmp_path):
    path = str(tmp_path / "projects.json")
    state = ProjectState(path)
    raw = {
        "name": "Household",
        "accounts": [{"id": "acc-1", "name": "Checking", "initialBalance": "250"}],
        "items": [
            {
                "id": "rent",
                "accountId": "acc-1",
                "startDate": "2025-01-01",
                "type": "Expense",
                "formula": "monthly_sum",
                "amount": 900,
                "isEnabled": True,
            }
        ],
    }

    document = state.save("Household", raw)

    assert document["version"] == 1
    assert "name" not in document
    assert document["accounts"] == [{"id": "acc-1", "name": "Checking", "initialBalance": 250.0}]
    assert document["items"][0]["type"] == "expense"
    assert document["items"][0]["formula"] == "MONTHLY_SUM"
    assert "isEnabled" not in document["items"][0]
    assert ProjectState(path).get("Household") == document

    project = ProjectState(path).load_project("Household")
    assert isinstance(project.items[0], EventRule)
    assert project.get_account(None).initial_balance == 250
    assert state.load_project("missing") is None


def test_project_state_rejects_invalid_documents(tmp_path):
    path = tmp_path / "projects.json"
    state = ProjectState(str(path))

    with pytest.raises(ProjectFormatError):
        state.save("Broken", {"accounts": [], "items": [{"id": "x", "type": "gift"}]})
    with pytest.raises(ProjectFormatError, match="name"):
        state.save("  ", {"accounts": [], "items": []})

    assert state.list_names() == []
    assert not path.exists()


def test_sanitize_records_used_for_api_payloads():
    rows = [{"value": float("nan"), "other": 5}]

    clean = _sanitize_records(rows)

    assert clean == [{"value": None, "other": 5}]
