from datetime import date

import pytest

from finsim.data_model import (
    EffectRule,
    EventRule,
    ProjectFormatError,
    parse_project,
    project_to_document,
    record_to_rule,
    rule_to_record,
)

EXPORTED = {
    "version": 1,
    "accounts": [
        {"id": "acc-1", "name": "Checking", "initialBalance": 2500},
        {"id": "acc-2", "name": "Savings", "initialBalance": 10000},
    ],
    "items": [
        {
            "id": "salary",
            "accountId": "acc-1",
            "name": "Salary",
            "startDate": "2025-01-25",
            "type": "income",
            "amount": 3200,
            "formula": "MONTHLY_SUM",
            "order": 0,
        },
        {
            "id": "to-savings",
            "accountId": "acc-1",
            "toAccountId": "acc-2",
            "name": "Save",
            "startDate": "2025-01-01",
            "endDate": "2025-12-31",
            "type": "transfer",
            "amount": 400,
            "formula": "RECURRING_SUM",
            "recurrenceDays": 14,
            "isCustomRecurrence": True,
        },
        {
            "id": "hysa",
            "accountId": "acc-2",
            "name": "HYSA",
            "startDate": "2025-01-01",
            "type": "effect",
            "formula": "COMPOUNDING",
            "interestRate": 4.25,
            "compoundingPeriod": "DAILY",
            "compoundingFrequency": 1,
            "isEnabled": False,
        },
    ],
}


def test_parse_project_builds_typed_rules():
    project = parse_project(EXPORTED)

    assert [a.id for a in project.accounts] == ["acc-1", "acc-2"]
    assert project.accounts[0].initial_balance == 2500
    salary, transfer, hysa = project.items
    assert isinstance(salary, EventRule)
    assert salary.start_date == date(2025, 1, 25)
    assert salary.end_date is None
    assert salary.enabled
    assert transfer.to_account_id == "acc-2"
    assert transfer.recurrence_days == 14
    assert transfer.end_date == date(2025, 12, 31)
    assert isinstance(hysa, EffectRule)
    assert hysa.kind == "effect"
    assert hysa.period == "DAILY"
    assert not hysa.enabled


def test_export_reproduces_the_document():
    assert project_to_document(parse_project(EXPORTED)) == EXPORTED


def test_get_account_defaults_to_first():
    project = parse_project(EXPORTED)

    assert project.get_account(None).id == "acc-1"
    assert project.get_account("acc-2").name == "Savings"
    assert project.get_account("missing") is None


def test_missing_numbers_fall_back_to_defaults():
    event = record_to_rule(
        {"id": "x", "accountId": "a", "startDate": "2025-01-01", "type": "expense", "formula": "lump_sum"}
    )
    effect = record_to_rule(
        {"id": "y", "accountId": "a", "startDate": "2025-01-01", "type": "effect", "formula": "SIMPLE_INTEREST"}
    )

    assert event.amount == 0
    assert event.formula == "LUMP_SUM"
    assert effect.interest_rate == 0
    assert effect.frequency == 1
    assert effect.custom_days == 1
    assert effect.resolved_period() == "ANNUALLY"


@pytest.mark.parametrize(
    "item,message",
    [
        ({"accountId": "a", "startDate": "2025-01-01", "type": "income", "formula": "LUMP_SUM"}, "missing an id"),
        ({"id": "x", "startDate": "2025-01-01", "type": "gift", "formula": "LUMP_SUM"}, "unknown type"),
        ({"id": "x", "startDate": "2025-01-01", "type": "effect", "formula": "LUMP_SUM"}, "formula"),
        ({"id": "x", "startDate": "2025-13-01", "type": "income", "formula": "LUMP_SUM"}, "startDate"),
        ({"id": "x", "type": "income", "formula": "LUMP_SUM"}, "startDate"),
        (
            {"id": "x", "startDate": "2025-01-01", "endDate": "soon", "type": "income", "formula": "LUMP_SUM"},
            "endDate",
        ),
        (
            {
                "id": "x",
                "startDate": "2025-01-01",
                "type": "effect",
                "formula": "COMPOUNDING",
                "compoundingPeriod": "HOURLY",
            },
            "compounding period",
        ),
    ],
)
def test_bad_items_raise_project_format_error(item, message):
    with pytest.raises(ProjectFormatError, match=message):
        record_to_rule(item)


def test_document_shape_is_validated():
    with pytest.raises(ProjectFormatError):
        parse_project([])
    with pytest.raises(ProjectFormatError):
        parse_project({"accounts": []})
    with pytest.raises(ProjectFormatError, match="Account is missing an id"):
        parse_project({"accounts": [{"name": "No id"}], "items": []})


def test_fractional_intervals_are_kept():
    event = record_to_rule(
        {
            "id": "x",
            "accountId": "a",
            "startDate": "2025-01-01",
            "type": "income",
            "formula": "RECURRING_SUM",
            "recurrenceDays": 7.5,
        }
    )
    effect = record_to_rule(
        {
            "id": "y",
            "accountId": "a",
            "startDate": "2025-01-01",
            "type": "effect",
            "formula": "COMPOUNDING",
            "compoundingPeriod": "CUSTOM",
            "compoundingFrequency": 1.5,
            "compoundingCustomDays": "10.5",
        }
    )

    assert event.recurrence_days == 7.5
    assert effect.frequency == 1.5
    assert effect.custom_days == 10.5
    assert rule_to_record(effect)["compoundingCustomDays"] == 10.5
    assert isinstance(record_to_rule(EXPORTED["items"][1]).recurrence_days, int)
