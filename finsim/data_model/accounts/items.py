from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..base import ProjectFormatError, to_float, to_text


@dataclass
class Account:
    id: str
    name: str
    initial_balance: float = 0.0


def record_to_account(row: dict) -> Account:
    account_id = to_text(row.get("id"))
    if not account_id:
        raise ProjectFormatError(f"Account is missing an id: {row!r}")
    return Account(
        id=account_id,
        name=to_text(row.get("name")) or account_id,
        initial_balance=to_float(row.get("initialBalance")),
    )


def records_to_accounts(rows: List[dict]) -> List[Account]:
    return [record_to_account(row) for row in rows or []]


def account_to_record(account: Account) -> dict:
    return {
        "id": account.id,
        "name": account.name,
        "initialBalance": account.initial_balance,
    }
