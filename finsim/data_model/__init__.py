from .accounts import Account, account_to_record, records_to_accounts
from .base import ProjectFormatError
from .project import (
    PROJECT_VERSION,
    Project,
    parse_project,
    project_to_document,
    record_to_rule,
    records_to_rules,
    rule_to_record,
)
from .rules import (
    COMPOUNDING_PERIODS,
    DEFAULT_ORDER,
    EVENT_FORMULAS,
    INTEREST_FORMULAS,
    RULE_TYPES,
    EffectRule,
    EventRule,
    Rule,
    active_rules,
    belongs_to,
    in_window,
)

__all__ = [
    "COMPOUNDING_PERIODS",
    "DEFAULT_ORDER",
    "EVENT_FORMULAS",
    "INTEREST_FORMULAS",
    "PROJECT_VERSION",
    "RULE_TYPES",
    "Account",
    "EffectRule",
    "EventRule",
    "Project",
    "ProjectFormatError",
    "Rule",
    "account_to_record",
    "active_rules",
    "belongs_to",
    "in_window",
    "parse_project",
    "project_to_document",
    "record_to_rule",
    "records_to_accounts",
    "records_to_rules",
    "rule_to_record",
]
