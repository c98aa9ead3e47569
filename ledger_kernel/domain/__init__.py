"""
Pure domain layer.

Record types, amount helpers and the clock abstraction, with NO
dependencies on:
- ORM (SQLAlchemy)
- Database
- I/O (SystemClock excepted)

All records are immutable and deterministic.
"""

from ledger_kernel.domain.amounts import (
    BALANCE_TOLERANCE,
    ZERO,
    format_amount,
    is_within_tolerance,
    round_amount,
    to_amount,
)
from ledger_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ledger_kernel.domain.records import (
    CASH_BANK_TYPES,
    AccountRecord,
    DateRange,
    DocumentKind,
    JournalLineRecord,
    JournalRecord,
    JournalStatus,
    OutstandingDocument,
    normalize_type,
    parse_account,
    parse_invoice,
    parse_journal,
    parse_journal_line,
    parse_purchase_bill,
)

__all__ = [
    # Amounts
    "BALANCE_TOLERANCE",
    "ZERO",
    "format_amount",
    "is_within_tolerance",
    "round_amount",
    "to_amount",
    # Clock
    "Clock",
    "DeterministicClock",
    "SystemClock",
    # Records
    "CASH_BANK_TYPES",
    "AccountRecord",
    "DateRange",
    "DocumentKind",
    "JournalLineRecord",
    "JournalRecord",
    "JournalStatus",
    "OutstandingDocument",
    "normalize_type",
    "parse_account",
    "parse_invoice",
    "parse_journal",
    "parse_journal_line",
    "parse_purchase_bill",
]
