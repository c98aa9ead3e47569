"""
Typed exception hierarchy for the ledger kernel.

Every error has a typed class (catch by type, not by message), a ``code``
class attribute (machine-readable, API-safe) and carries its context as
structured attributes.

    LedgerError (base)
    |
    +-- RecordError
    |   +-- RecordParseError
    |
    +-- DateRangeError
    |   +-- InvalidDateRangeError
    |
    +-- AccountError
    |   +-- AccountNotFoundError
    |
    +-- ConfigError
        +-- InvalidConfigError

Category        | Code                 | When Raised
----------------|----------------------|---------------------------------------
Record          | RECORD_PARSE_ERROR   | Raw row missing a required field or
                |                      | carrying an unparseable value
----------------|----------------------|---------------------------------------
Date range      | INVALID_DATE_RANGE   | start is after end
----------------|----------------------|---------------------------------------
Account         | ACCOUNT_NOT_FOUND    | Report requested for an account that
                |                      | is not in the user's chart
----------------|----------------------|---------------------------------------
Config          | INVALID_CONFIG       | Reporting configuration rejected

Data-quality problems inside the ledger itself (lines without an account,
lines pointing at unknown accounts, lines with both sides set) are NOT
exceptions. The aggregation engines count them in a ``LineIntegrity``
diagnostic and keep going.
"""

from datetime import date
from typing import Any


class LedgerError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_ERROR"


# Record-related exceptions


class RecordError(LedgerError):
    """Base exception for record boundary errors."""

    code: str = "RECORD_ERROR"


class RecordParseError(RecordError):
    """A raw storage row could not be parsed into a typed record."""

    code: str = "RECORD_PARSE_ERROR"

    def __init__(self, record_type: str, field: str, value: Any = None, reason: str = "missing"):
        self.record_type = record_type
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(
            f"Cannot parse {record_type}: field '{field}' is {reason}"
            + ("" if value is None else f" ({value!r})")
        )


# Date range exceptions


class DateRangeError(LedgerError):
    """Base exception for reporting period errors."""

    code: str = "DATE_RANGE_ERROR"


class InvalidDateRangeError(DateRangeError):
    """Reporting period starts after it ends."""

    code: str = "INVALID_DATE_RANGE"

    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end
        super().__init__(f"Invalid date range: {start} is after {end}")


# Account-related exceptions


class AccountError(LedgerError):
    """Base exception for account-related errors."""

    code: str = "ACCOUNT_ERROR"


class AccountNotFoundError(AccountError):
    """Account was not found in the user's chart of accounts."""

    code: str = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


# Configuration exceptions


class ConfigError(LedgerError):
    """Base exception for configuration errors."""

    code: str = "CONFIG_ERROR"


class InvalidConfigError(ConfigError):
    """A reporting configuration value was rejected."""

    code: str = "INVALID_CONFIG"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration for '{key}': {reason}")
