from __future__ import annotations

from typing import Optional

from ..data_model import Rule, in_window
from .dates import DateLike, iter_days, try_parse_date
from .occurrence import event_fires, signed_impact


def calculate_total_delta(
    rule: Rule,
    range_start: DateLike,
    range_end: DateLike,
    account_id: Optional[str] = None,
) -> float:
    """Total signed effect of one event rule between two dates.

    Used for summaries when no simulation totals exist for the range. Interest
    depends on the balance history, so effect rules always report 0.
    """
    if rule.is_effect():
        return 0.0
    start = try_parse_date(range_start)
    end = try_parse_date(range_end)
    if start is None or end is None:
        return 0.0

    impact = signed_impact(rule, account_id or rule.account_id)
    total = 0.0
    for day in iter_days(start, end):
        if in_window(rule, day) and event_fires(rule, day):
            total += impact
    return total
