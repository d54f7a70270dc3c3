from .items import Account, account_to_record, record_to_account, records_to_accounts

__all__ = [
    "Account",
    "account_to_record",
    "record_to_account",
    "records_to_accounts",
]
