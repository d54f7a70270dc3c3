from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Literal, Optional, Union

RULE_TYPES = ["income", "expense", "transfer", "effect"]
EVENT_FORMULAS = ["LUMP_SUM", "MONTHLY_SUM", "RECURRING_SUM"]
INTEREST_FORMULAS = ["COMPOUNDING", "SIMPLE_INTEREST"]
COMPOUNDING_PERIODS = ["DAILY", "WEEKLY", "MONTHLY", "QUARTERLY", "ANNUALLY", "CUSTOM"]

# Rules without an explicit order sort after every ordered rule.
DEFAULT_ORDER = 999999


@dataclass
class EventRule:
    """Income, expense or transfer applied on the days its formula selects."""

    id: str
    account_id: str
    name: str
    kind: Literal["income", "expense", "transfer"]
    formula: str  # LUMP_SUM | MONTHLY_SUM | RECURRING_SUM
    start_date: date
    end_date: Optional[date] = None
    amount: float = 0.0
    recurrence_days: Optional[float] = None
    to_account_id: Optional[str] = None
    order: Optional[int] = None
    enabled: bool = True
    custom_recurrence: bool = False

    def is_effect(self) -> bool:
        return False


@dataclass
class EffectRule:
    """Interest applied to the running balance on its compounding schedule."""

    id: str
    account_id: str
    name: str
    formula: str  # COMPOUNDING | SIMPLE_INTEREST
    start_date: date
    end_date: Optional[date] = None
    interest_rate: float = 0.0  # nominal annual, percent
    period: Optional[str] = None
    frequency: float = 1  # applications per period, compounding only
    custom_days: float = 1
    to_account_id: Optional[str] = None
    order: Optional[int] = None
    enabled: bool = True

    kind: Literal["effect"] = "effect"

    def is_effect(self) -> bool:
        return True

    def resolved_period(self) -> str:
        if self.period:
            return self.period
        return "ANNUALLY" if self.formula == "SIMPLE_INTEREST" else "MONTHLY"


Rule = Union[EventRule, EffectRule]


def belongs_to(rule: Rule, account_id: str) -> bool:
    return rule.account_id == account_id or rule.to_account_id == account_id


def in_window(rule: Rule, day: date) -> bool:
    if day < rule.start_date:
        return False
    if rule.end_date is not None and day > rule.end_date:
        return False
    return True


def sort_key(rule: Rule) -> int:
    return DEFAULT_ORDER if rule.order is None else rule.order


def active_rules(rules: List[Rule], account_id: str) -> List[Rule]:
    """Enabled rules touching ``account_id`` in application order."""
    selected = [r for r in rules if belongs_to(r, account_id) and r.enabled]
    return sorted(selected, key=sort_key)
