from __future__ import annotations

from datetime import date

from ..data_model import EventRule
from .dates import days_between, is_anchor_day


def lump_sum_fires(start: date, day: date) -> bool:
    return day == start


def monthly_fires(start: date, day: date) -> bool:
    """Same day of month as ``start``, clamped to shorter months."""
    return is_anchor_day(start, day)


def recurring_fires(start: date, day: date, every_days) -> bool:
    if not every_days or every_days < 1:
        return False
    diff = days_between(start, day)
    return diff >= 0 and diff % every_days == 0


def event_fires(rule: EventRule, day: date) -> bool:
    if rule.formula == "LUMP_SUM":
        return lump_sum_fires(rule.start_date, day)
    if rule.formula == "MONTHLY_SUM":
        return monthly_fires(rule.start_date, day)
    if rule.formula == "RECURRING_SUM":
        return recurring_fires(rule.start_date, day, rule.recurrence_days)
    return False


def signed_impact(rule: EventRule, account_id: str) -> float:
    """Amount one occurrence adds to ``account_id``'s balance.

    Expenses and outgoing transfers of the owning account are negative;
    income of the owner and transfers into the account are positive.
    """
    amount = rule.amount or 0.0
    outgoing = rule.account_id == account_id and rule.kind != "income"
    incoming = rule.to_account_id == account_id or (
        rule.account_id == account_id and rule.kind == "income"
    )
    if outgoing:
        return -amount
    if incoming:
        return amount
    return 0.0
