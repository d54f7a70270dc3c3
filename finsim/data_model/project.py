# data_model/project.py
"""Flat project document used for export and import.

The document mirrors what the editor saves to disk::

    {"version": 1, "accounts": [...], "items": [...]}

Field names are camelCase on the wire and snake_case on the dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..engine.dates import format_date, parse_date
from .accounts import Account, account_to_record, records_to_accounts
from .base import ProjectFormatError, to_float, to_int, to_number, to_text
from .rules import (
    COMPOUNDING_PERIODS,
    EVENT_FORMULAS,
    INTEREST_FORMULAS,
    RULE_TYPES,
    EffectRule,
    EventRule,
    Rule,
)

PROJECT_VERSION = 1


@dataclass
class Project:
    accounts: List[Account] = field(default_factory=list)
    items: List[Rule] = field(default_factory=list)
    version: int = PROJECT_VERSION
    view_settings: Optional[dict] = None
    active_account_id: Optional[str] = None

    def get_account(self, account_id: Optional[str]) -> Optional[Account]:
        if not self.accounts:
            return None
        if not account_id:
            return self.accounts[0]
        for account in self.accounts:
            if account.id == account_id:
                return account
        return None


def _required_date(row: dict, key: str, label: str):
    raw = row.get(key)
    if not raw:
        raise ProjectFormatError(f"{label} is missing '{key}'")
    try:
        return parse_date(raw)
    except ValueError as exc:
        raise ProjectFormatError(f"{label} has an invalid '{key}': {raw!r}") from exc


def _optional_date(row: dict, key: str, label: str):
    raw = row.get(key)
    if not raw:
        return None
    try:
        return parse_date(raw)
    except ValueError as exc:
        raise ProjectFormatError(f"{label} has an invalid '{key}': {raw!r}") from exc


def _positive_number(value):
    number = to_number(value)
    return number if number and number > 0 else 1


def record_to_rule(row: dict) -> Rule:
    """Build an :class:`EventRule` or :class:`EffectRule` from a document item."""
    rule_id = to_text(row.get("id"))
    if not rule_id:
        raise ProjectFormatError(f"Item is missing an id: {row!r}")
    label = f"Item '{rule_id}'"

    kind = str(row.get("type", "")).strip().lower()
    if kind not in RULE_TYPES:
        raise ProjectFormatError(f"{label} has an unknown type: {row.get('type')!r}")
    formula = str(row.get("formula", "")).strip().upper()
    allowed = INTEREST_FORMULAS if kind == "effect" else EVENT_FORMULAS
    if formula not in allowed:
        raise ProjectFormatError(f"{label} has formula {row.get('formula')!r}, expected one of {allowed}")

    common: Dict[str, Any] = {
        "id": rule_id,
        "account_id": to_text(row.get("accountId")) or "",
        "name": to_text(row.get("name")) or rule_id,
        "formula": formula,
        "start_date": _required_date(row, "startDate", label),
        "end_date": _optional_date(row, "endDate", label),
        "to_account_id": to_text(row.get("toAccountId")),
        "order": to_int(row.get("order")),
        "enabled": row.get("isEnabled") is not False,
    }

    if kind == "effect":
        period = to_text(row.get("compoundingPeriod"))
        if period is not None:
            period = period.upper()
            if period not in COMPOUNDING_PERIODS:
                raise ProjectFormatError(f"{label} has an unknown compounding period: {period!r}")
        return EffectRule(
            interest_rate=to_float(row.get("interestRate")),
            period=period,
            frequency=_positive_number(row.get("compoundingFrequency")),
            custom_days=_positive_number(row.get("compoundingCustomDays")),
            **common,
        )

    return EventRule(
        kind=kind,
        amount=to_float(row.get("amount")),
        recurrence_days=to_number(row.get("recurrenceDays")),
        custom_recurrence=bool(row.get("isCustomRecurrence", False)),
        **common,
    )


def records_to_rules(rows: List[dict]) -> List[Rule]:
    return [record_to_rule(row) for row in rows or []]


def rule_to_record(rule: Rule) -> dict:
    record: Dict[str, Any] = {
        "id": rule.id,
        "accountId": rule.account_id,
        "name": rule.name,
        "startDate": format_date(rule.start_date),
        "type": rule.kind,
        "formula": rule.formula,
    }
    if rule.end_date is not None:
        record["endDate"] = format_date(rule.end_date)
    if rule.to_account_id:
        record["toAccountId"] = rule.to_account_id
    if rule.order is not None:
        record["order"] = rule.order
    if not rule.enabled:
        record["isEnabled"] = False

    if isinstance(rule, EffectRule):
        record["interestRate"] = rule.interest_rate
        if rule.period:
            record["compoundingPeriod"] = rule.period
        record["compoundingFrequency"] = rule.frequency
        if rule.resolved_period() == "CUSTOM":
            record["compoundingCustomDays"] = rule.custom_days
    else:
        record["amount"] = rule.amount
        if rule.recurrence_days is not None:
            record["recurrenceDays"] = rule.recurrence_days
        if rule.custom_recurrence:
            record["isCustomRecurrence"] = True
    return record


def parse_project(payload: Any) -> Project:
    """Validate a deserialized document and return a :class:`Project`."""
    if not isinstance(payload, dict):
        raise ProjectFormatError("Project document must be a JSON object.")
    accounts = payload.get("accounts")
    items = payload.get("items")
    if not isinstance(accounts, list) or not isinstance(items, list):
        raise ProjectFormatError("Project document needs 'accounts' and 'items' lists.")
    view_settings = payload.get("viewSettings")
    return Project(
        accounts=records_to_accounts(accounts),
        items=records_to_rules(items),
        version=to_int(payload.get("version"), PROJECT_VERSION) or PROJECT_VERSION,
        view_settings=view_settings if isinstance(view_settings, dict) else None,
        active_account_id=to_text(payload.get("activeAccountId")),
    )


def project_to_document(project: Project) -> dict:
    document: Dict[str, Any] = {
        "version": project.version,
        "accounts": [account_to_record(a) for a in project.accounts],
        "items": [rule_to_record(r) for r in project.items],
    }
    if project.view_settings is not None:
        document["viewSettings"] = project.view_settings
    if project.active_account_id:
        document["activeAccountId"] = project.active_account_id
    return document
