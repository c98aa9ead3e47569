"""
Module: ledger_engines.account_ledger
Responsibility:
    Build the ledger of a single account: its lines in date order with a
    cumulative running balance that starts from the account's opening
    balance.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Lines are ordered by journal date, then line ``created_at``, then
      line id.
    - closing_balance = opening_balance + total_debit - total_credit.
    - The running balance never resets (unlike the day book).
    - With a date range, lines dated before the start are brought forward
      into the opening balance; lines after the end are ignored.

Failure modes:
    - None raised.  A line whose journal is unknown is dated from its
      ``created_at``; without either it is dropped.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from ledger_kernel.domain.amounts import ZERO, round_amount
from ledger_kernel.domain.records import (
    AccountRecord,
    DateRange,
    JournalLineRecord,
    JournalRecord,
)
from ledger_kernel.logging_config import get_logger
from ledger_engines.day_book import particulars_for, voucher_number_for
from ledger_engines.tracer import traced_engine

logger = get_logger("engines.account_ledger")

_NO_TIMESTAMP = datetime.min


@dataclass(frozen=True)
class AccountLedgerRow:
    date: date
    particulars: str
    voucher_number: str
    debit: Decimal
    credit: Decimal
    running_balance: Decimal
    journal_id: str
    line_id: str


@dataclass(frozen=True)
class AccountLedger:
    account_id: str
    code: str
    name: str
    opening_balance: Decimal
    rows: tuple[AccountLedgerRow, ...]
    closing_balance: Decimal
    total_debit: Decimal
    total_credit: Decimal


def _line_date(line: JournalLineRecord, journal: JournalRecord | None) -> date | None:
    if journal is not None:
        return journal.journal_date
    if line.created_at is not None:
        return line.created_at.date()
    return None


def _sort_key(entry: tuple[date, JournalLineRecord, JournalRecord | None]):
    day, line, _ = entry
    created = line.created_at.replace(tzinfo=None) if line.created_at else _NO_TIMESTAMP
    return (day, created, line.line_id)


@traced_engine(
    "account_ledger", "1.0",
    fingerprint_fields=("account", "journals", "lines", "date_range"),
)
def build_account_ledger(
    account: AccountRecord,
    journals: Sequence[JournalRecord],
    lines: Sequence[JournalLineRecord],
    date_range: DateRange | None = None,
) -> AccountLedger:
    """
    Build the running-balance ledger of ``account``.

    Args:
        account: The account to report.
        journals: Journals the lines belong to.
        lines: Journal lines; lines of other accounts are ignored.
        date_range: Optional inclusive reporting period.
    """
    journal_by_id = {j.journal_id: j for j in journals}

    entries: list[tuple[date, JournalLineRecord, JournalRecord | None]] = []
    dropped = 0
    for line in lines:
        if line.account_id != account.account_id:
            continue
        journal = journal_by_id.get(line.journal_id)
        day = _line_date(line, journal)
        if day is None:
            dropped += 1
            continue
        entries.append((day, line, journal))
    entries.sort(key=_sort_key)

    opening = account.opening_balance
    rows: list[AccountLedgerRow] = []
    total_debit = ZERO
    total_credit = ZERO
    running = opening
    for day, line, journal in entries:
        if date_range is not None and date_range.end is not None and day > date_range.end:
            continue
        if date_range is not None and date_range.start is not None and day < date_range.start:
            opening += line.debit - line.credit
            running = opening
            continue

        running += line.debit - line.credit
        total_debit += line.debit
        total_credit += line.credit
        if journal is not None:
            particulars = particulars_for(journal, line)
            voucher = voucher_number_for(journal)
        else:
            particulars = line.line_narration or ""
            voucher = ""
        rows.append(
            AccountLedgerRow(
                date=day,
                particulars=particulars,
                voucher_number=voucher,
                debit=round_amount(line.debit),
                credit=round_amount(line.credit),
                running_balance=round_amount(running),
                journal_id=line.journal_id,
                line_id=line.line_id,
            )
        )

    closing = opening + total_debit - total_credit
    logger.info("account_ledger_built", extra={
        "account_id": account.account_id,
        "row_count": len(rows),
        "dropped_lines": dropped,
        "closing_balance": str(round_amount(closing)),
    })

    return AccountLedger(
        account_id=account.account_id,
        code=account.code,
        name=account.name,
        opening_balance=round_amount(opening),
        rows=tuple(rows),
        closing_balance=round_amount(closing),
        total_debit=round_amount(total_debit),
        total_credit=round_amount(total_credit),
    )
