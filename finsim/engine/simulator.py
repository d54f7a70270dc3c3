from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from ..data_model import Account, Rule, active_rules, in_window
from .dates import DateLike, format_date, iter_days, try_parse_date
from .interest import interest_for_day
from .occurrence import event_fires, signed_impact

# Fixed ceiling on simulated days. Longer ranges are truncated, not rejected.
MAX_SIMULATION_DAYS = 5000


@dataclass
class SimulationPoint:
    date: str
    balance: float
    balance_before_effects: float
    item_start_balances: Dict[str, float] = field(default_factory=dict)
    item_contributions: Dict[str, float] = field(default_factory=dict)

    def to_record(self) -> dict:
        return {
            "date": self.date,
            "balance": self.balance,
            "balanceBeforeEffects": self.balance_before_effects,
            "itemStartBalances": dict(self.item_start_balances),
            "itemContributions": dict(self.item_contributions),
        }


@dataclass
class SimulationResult:
    points: List[SimulationPoint] = field(default_factory=list)
    item_totals: Dict[str, float] = field(default_factory=dict)

    @property
    def final_balance(self) -> Optional[float]:
        return self.points[-1].balance if self.points else None

    def point_for(self, day: str) -> Optional[SimulationPoint]:
        for point in self.points:
            if point.date == day:
                return point
        return None


def _resolve_range(start: DateLike, end: DateLike) -> Optional[tuple[date, date]]:
    start_day = try_parse_date(start)
    end_day = try_parse_date(end)
    if start_day is None or end_day is None or start_day > end_day:
        return None
    return start_day, end_day


def run_simulation(
    account: Account,
    rules: List[Rule],
    start_date: DateLike,
    end_date: DateLike,
) -> SimulationResult:
    """Project ``account`` day by day from ``start_date`` to ``end_date`` inclusive.

    Every supplied rule gets a contribution entry, including disabled rules and
    rules of other accounts, so consumers can look any id up without checks.
    Malformed or reversed ranges yield no points.
    """
    contributions: Dict[str, float] = {rule.id: 0.0 for rule in rules}
    result = SimulationResult(item_totals=dict(contributions))

    bounds = _resolve_range(start_date, end_date)
    if bounds is None:
        return result

    active = active_rules(rules, account.id)
    events = [r for r in active if not r.is_effect()]
    effects = [r for r in active if r.is_effect()]

    balance = account.initial_balance
    start_balances: Dict[str, float] = {}

    for day in iter_days(bounds[0], bounds[1], MAX_SIMULATION_DAYS):
        for rule in events:
            if not in_window(rule, day):
                continue
            start_balances[rule.id] = balance
            if event_fires(rule, day):
                impact = signed_impact(rule, account.id)
                balance += impact
                contributions[rule.id] += impact

        balance_before_effects = balance

        # Interest compounds on the post-event balance of the same day.
        for rule in effects:
            if not in_window(rule, day):
                continue
            start_balances[rule.id] = balance
            interest = interest_for_day(rule, day, balance)
            if interest:
                balance += interest
                contributions[rule.id] += interest

        result.points.append(
            SimulationPoint(
                date=format_date(day),
                balance=balance,
                balance_before_effects=balance_before_effects,
                item_start_balances=dict(start_balances),
                item_contributions=dict(contributions),
            )
        )

    result.item_totals = dict(contributions)
    return result
