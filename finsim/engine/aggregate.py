from __future__ import annotations

from typing import Iterable

import pandas as pd

from .simulator import SimulationPoint

CONTRIBUTION_PREFIX = "Contribution."
FREQUENCIES = {"D", "W", "M", "Q", "Y"}


def points_to_frame(points: Iterable[SimulationPoint]) -> pd.DataFrame:
    """Flatten simulation points into one row per day."""
    records = []
    for point in points:
        row = {
            "Date": point.date,
            "Balance": point.balance,
            "BalanceBeforeEffects": point.balance_before_effects,
        }
        for rule_id, value in point.item_contributions.items():
            row[f"{CONTRIBUTION_PREFIX}{rule_id}"] = value
        records.append(row)
    return pd.DataFrame(records)


def _week_of_year(dates: pd.Series) -> pd.Series:
    # Sunday-start weeks counted from 1 January; week 1 holds 1 January.
    jan1 = pd.to_datetime(dates.dt.year.astype(str) + "-01-01")
    offset = (jan1.dt.dayofweek + 1) % 7
    return (dates.dt.dayofyear + offset + 6) // 7


def _period_labels(dates: pd.Series, freq: str) -> pd.Series:
    years = dates.dt.year.astype(str)
    if freq == "W":
        return years + "-W" + _week_of_year(dates).astype(str).str.zfill(2)
    if freq == "M":
        return dates.dt.strftime("%Y-%m")
    if freq == "Q":
        return years + " Q" + dates.dt.quarter.astype(str)
    if freq == "Y":
        return years
    return dates.dt.strftime("%Y-%m-%d")


def aggregate_period(df: pd.DataFrame, freq: str = "M") -> pd.DataFrame:
    """Collapse daily rows to the last row of each week/month/quarter/year.

    The first and the last row of the frame are always kept, even when they do
    not close a period, so a chart still starts and ends on the requested
    dates.
    """
    if df.empty:
        return df

    freq = (freq or "M").upper()
    if freq not in FREQUENCIES:
        raise ValueError(f"Unknown aggregation frequency: {freq}")
    if "Date" not in df.columns:
        raise KeyError("Missing required column: Date")

    df = df.copy()
    dates = pd.to_datetime(df["Date"])
    df["Period"] = _period_labels(dates, freq).values
    df = df.assign(_ts=dates.values).sort_values("_ts").reset_index(drop=True)

    if freq == "D":
        return df.drop(columns="_ts")

    period_ends = df.groupby("Period", sort=False).tail(1)
    kept = pd.concat([df.head(1), period_ends, df.tail(1)])
    kept = kept[~kept.index.duplicated(keep="first")].sort_values("_ts")
    return kept.drop(columns="_ts").reset_index(drop=True)
