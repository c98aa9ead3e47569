"""
Records -- Typed, immutable inputs for the ledger engines.

Responsibility:
    Define one frozen record type per stored entity (account, journal,
    journal line, outstanding invoice or bill) and parse loosely-typed
    storage rows into them. Parsing happens once, at the collaborator
    boundary; engines only ever see these records.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Amounts are Decimal (see ``amounts.to_amount``); a null debit or
      credit column parses as zero.
    - Required fields are explicit: a row without one raises
      ``RecordParseError`` instead of flowing on as ``None``.
    - ``JournalLineRecord.account_id`` is the one optional reference; lines
      without it are ignored by aggregation rather than rejected here.

Failure modes:
    - RecordParseError on a missing required field or unparseable value.
    - InvalidDateRangeError when a DateRange starts after it ends.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from ledger_kernel.domain.amounts import ZERO, to_amount
from ledger_kernel.exceptions import InvalidDateRangeError, RecordParseError

# Account types whose lines appear in the day book
CASH_BANK_TYPES: frozenset[str] = frozenset({"cash", "bank"})


def normalize_type(value: str | None) -> str:
    """Case-insensitive key for account type comparisons."""
    return (value or "").strip().casefold()


class JournalStatus(str, Enum):
    """Lifecycle status of a journal. Only DRAFT -> POSTED -> VOID."""

    DRAFT = "draft"
    POSTED = "posted"
    VOID = "void"


class DocumentKind(str, Enum):
    """Which side of the business an outstanding document sits on."""

    RECEIVABLE = "receivable"  # sales invoice
    PAYABLE = "payable"  # purchase bill


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive reporting period. Either bound may be open.

    Guarantees:
        - start <= end when both are set.
    """

    start: date | None = None
    end: date | None = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise InvalidDateRangeError(self.start, self.end)

    @property
    def is_bounded(self) -> bool:
        return self.start is not None or self.end is not None

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


@dataclass(frozen=True)
class AccountRecord:
    """A chart-of-accounts entry. ``code`` is the report sort key."""

    account_id: str
    code: str
    name: str
    account_type: str
    opening_balance: Decimal = ZERO

    @property
    def normalized_type(self) -> str:
        return normalize_type(self.account_type)

    @property
    def is_cash_or_bank(self) -> bool:
        return self.normalized_type in CASH_BANK_TYPES


@dataclass(frozen=True)
class JournalRecord:
    """A dated accounting entry grouping one or more lines."""

    journal_id: str
    journal_date: date
    narration: str | None
    status: JournalStatus
    user_id: str
    journal_number: str | None = None


@dataclass(frozen=True)
class JournalLineRecord:
    """
    One debit and/or credit posting within a journal.

    A well-formed line has exactly one non-zero side. That is not enforced
    here; the aggregator sums whatever sides are populated and reports the
    malformed ones in its integrity diagnostic.
    """

    line_id: str
    journal_id: str
    account_id: str | None
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    line_narration: str | None = None
    created_at: datetime | None = None

    @property
    def is_linked(self) -> bool:
        return bool(self.account_id)

    @property
    def has_both_sides(self) -> bool:
        return self.debit != ZERO and self.credit != ZERO

    @property
    def is_empty(self) -> bool:
        return self.debit == ZERO and self.credit == ZERO

    @property
    def is_one_sided(self) -> bool:
        return not self.has_both_sides and not self.is_empty

    @property
    def net(self) -> Decimal:
        """debit - credit"""
        return self.debit - self.credit


@dataclass(frozen=True)
class OutstandingDocument:
    """
    A receivable (invoice) or payable (purchase bill).

    ``settled_amount`` unifies the invoice ``advance`` and the bill
    ``paid_amount`` columns.
    """

    document_id: str
    kind: DocumentKind
    party_name: str
    document_number: str
    due_date: date
    total_amount: Decimal
    settled_amount: Decimal
    status: str

    @property
    def amount_due(self) -> Decimal:
        return self.total_amount - self.settled_amount


# =========================================================================
# Boundary parsers
# =========================================================================


def _require(row: Mapping[str, Any], key: str, record_type: str) -> Any:
    value = row.get(key)
    if value is None or value == "":
        raise RecordParseError(record_type, key)
    return value


def _parse_date(value: Any, record_type: str, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            if len(value) == 10:
                return date.fromisoformat(value)
            return datetime.fromisoformat(value).date()
        except ValueError as e:
            raise RecordParseError(record_type, field, value, "not a date") from e
    raise RecordParseError(record_type, field, value, "not a date")


def _parse_datetime(value: Any, record_type: str, field: str) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise RecordParseError(record_type, field, value, "not a timestamp") from e
    raise RecordParseError(record_type, field, value, "not a timestamp")


def _parse_amount(row: Mapping[str, Any], key: str, record_type: str) -> Decimal:
    value = row.get(key)
    try:
        return to_amount(value)
    except ValueError as e:
        raise RecordParseError(record_type, key, value, "not numeric") from e


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def parse_account(row: Mapping[str, Any]) -> AccountRecord:
    """Parse an ``accounts`` row."""
    return AccountRecord(
        account_id=str(_require(row, "id", "account")),
        code=str(_require(row, "account_code", "account")),
        name=str(_require(row, "account_name", "account")),
        account_type=str(row.get("account_type") or ""),
        opening_balance=_parse_amount(row, "opening_balance", "account"),
    )


def parse_journal(row: Mapping[str, Any]) -> JournalRecord:
    """Parse a ``journals`` row."""
    raw_status = str(row.get("status") or JournalStatus.POSTED.value).strip().lower()
    try:
        status = JournalStatus(raw_status)
    except ValueError as e:
        raise RecordParseError("journal", "status", raw_status, "not a journal status") from e

    return JournalRecord(
        journal_id=str(_require(row, "id", "journal")),
        journal_date=_parse_date(_require(row, "journal_date", "journal"), "journal", "journal_date"),
        narration=_optional_str(row.get("narration")),
        status=status,
        user_id=str(_require(row, "user_id", "journal")),
        journal_number=_optional_str(row.get("journal_number")),
    )


def parse_journal_line(row: Mapping[str, Any]) -> JournalLineRecord:
    """Parse a ``journal_lines`` row. ``account_id`` may be null."""
    return JournalLineRecord(
        line_id=str(_require(row, "id", "journal_line")),
        journal_id=str(_require(row, "journal_id", "journal_line")),
        account_id=_optional_str(row.get("account_id")),
        debit=_parse_amount(row, "debit", "journal_line"),
        credit=_parse_amount(row, "credit", "journal_line"),
        line_narration=_optional_str(row.get("line_narration")),
        created_at=_parse_datetime(row.get("created_at"), "journal_line", "created_at"),
    )


def parse_invoice(row: Mapping[str, Any]) -> OutstandingDocument:
    """Parse an ``invoices`` row. The settled amount is the ``advance`` column."""
    return OutstandingDocument(
        document_id=str(_require(row, "id", "invoice")),
        kind=DocumentKind.RECEIVABLE,
        party_name=str(row.get("client_name") or ""),
        document_number=str(row.get("invoice_number") or ""),
        due_date=_parse_date(_require(row, "due_date", "invoice"), "invoice", "due_date"),
        total_amount=_parse_amount(row, "total_amount", "invoice"),
        settled_amount=_parse_amount(row, "advance", "invoice"),
        status=str(row.get("status") or ""),
    )


def parse_purchase_bill(row: Mapping[str, Any]) -> OutstandingDocument:
    """Parse a ``purchase_bills`` row. The settled amount is ``paid_amount``."""
    return OutstandingDocument(
        document_id=str(_require(row, "id", "purchase_bill")),
        kind=DocumentKind.PAYABLE,
        party_name=str(row.get("vendor_name") or ""),
        document_number=str(row.get("bill_number") or ""),
        due_date=_parse_date(_require(row, "due_date", "purchase_bill"), "purchase_bill", "due_date"),
        total_amount=_parse_amount(row, "total_amount", "purchase_bill"),
        settled_amount=_parse_amount(row, "paid_amount", "purchase_bill"),
        status=str(row.get("status") or ""),
    )
