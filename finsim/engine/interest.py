"""Interest schedules for effect rules.

Two families are supported. Compounding interest is applied ``frequency``
times per compounding period; simple interest once per period. Either way the
rate is a nominal annual percentage split evenly across the applications of a
year, and each application is computed on the balance at that moment.

Periods without a natural calendar anchor (or with several applications per
period) use an approximate day interval. A day is an application day when the
interval count ``floor((diff + 0.1) / interval)`` advances from the previous
day. The 0.1 day tolerance keeps float intervals such as ``30.4375 / 2`` from
missing a boundary.
"""

from __future__ import annotations

import math
from datetime import date

from ..data_model import EffectRule
from .dates import days_between, is_anchor_day, months_between

INTERVAL_EPSILON = 0.1

# Approximate period lengths in days for interval-based schedules.
PERIOD_DAYS = {
    "WEEKLY": 7.0,
    "MONTHLY": 30.4375,
    "QUARTERLY": 91.31,
    "ANNUALLY": 365.25,
}

PERIODS_PER_YEAR = {
    "DAILY": 365,
    "WEEKLY": 52,
    "MONTHLY": 12,
    "QUARTERLY": 4,
    "ANNUALLY": 1,
}


def _positive(value) -> float:
    """Missing or non-positive frequencies and day counts count as 1."""
    return value if value and value > 0 else 1


def crosses_interval(diff_days: int, interval: float) -> bool:
    if interval <= 0:
        return False
    current = math.floor((diff_days + INTERVAL_EPSILON) / interval)
    previous = math.floor((diff_days - 1 + INTERVAL_EPSILON) / interval)
    return current > previous


def quarter_anchor(start: date, day: date) -> bool:
    months = months_between(start, day)
    return months > 0 and months % 3 == 0 and is_anchor_day(start, day)


def annual_anchor(start: date, day: date) -> bool:
    return day.month == start.month and is_anchor_day(start, day) and day.year > start.year


def compounding_applies(rule: EffectRule, day: date) -> bool:
    diff = days_between(rule.start_date, day)
    if diff < 0:
        return False
    period = rule.resolved_period()
    frequency = _positive(rule.frequency)

    if period == "DAILY":
        return True
    if period == "CUSTOM":
        return crosses_interval(diff, _positive(rule.custom_days) / frequency)
    if period == "WEEKLY":
        return crosses_interval(diff, PERIOD_DAYS["WEEKLY"] / frequency)
    if frequency == 1:
        if period == "MONTHLY":
            return is_anchor_day(rule.start_date, day)
        if period == "QUARTERLY":
            return quarter_anchor(rule.start_date, day)
        if period == "ANNUALLY":
            return annual_anchor(rule.start_date, day)
        return False
    if period in PERIOD_DAYS:
        return crosses_interval(diff, PERIOD_DAYS[period] / frequency)
    return False


def compounding_rate(rule: EffectRule) -> float:
    period = rule.resolved_period()
    frequency = _positive(rule.frequency)
    if period == "CUSTOM":
        applications = 365 / (_positive(rule.custom_days) / frequency)
    else:
        applications = PERIODS_PER_YEAR.get(period, 1) * frequency
    return (rule.interest_rate / 100) / applications


def simple_applies(rule: EffectRule, day: date) -> bool:
    diff = days_between(rule.start_date, day)
    if diff < 0:
        return False
    period = rule.resolved_period()

    if period == "DAILY":
        return True
    if period == "WEEKLY":
        return diff > 0 and diff % 7 == 0
    if period == "MONTHLY":
        return is_anchor_day(rule.start_date, day)
    if period == "QUARTERLY":
        return quarter_anchor(rule.start_date, day)
    if period == "ANNUALLY":
        return annual_anchor(rule.start_date, day)
    if period == "CUSTOM":
        custom_days = _positive(rule.custom_days)
        return diff > 0 and diff % custom_days == 0
    return False


def simple_rate(rule: EffectRule) -> float:
    period = rule.resolved_period()
    if period == "CUSTOM":
        applications = 365 / _positive(rule.custom_days)
    else:
        applications = PERIODS_PER_YEAR.get(period, 1)
    return (rule.interest_rate / 100) / applications


def interest_for_day(rule: EffectRule, day: date, balance: float) -> float:
    """Interest to add on ``day`` given the balance at the moment of application."""
    if not rule.interest_rate:
        return 0.0
    if rule.formula == "COMPOUNDING":
        if compounding_applies(rule, day):
            return balance * compounding_rate(rule)
        return 0.0
    if rule.formula == "SIMPLE_INTEREST":
        if simple_applies(rule, day):
            return balance * simple_rate(rule)
        return 0.0
    return 0.0
