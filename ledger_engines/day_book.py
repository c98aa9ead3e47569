"""
Module: ledger_engines.day_book
Responsibility:
    Build the day book: one row per cash or bank journal line in a period,
    in date order, each carrying a running balance that restarts at zero on
    every new day.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Rows are stably sorted by journal date; rows of the same date keep
      journal order, then line order.
    - balance(row) = sum of (debit - credit) over the rows of the same date
      up to and including this one.
    - Particulars fall back from the journal narration to the line narration
      to a configured default.

Failure modes:
    - None raised.  Lines whose journal or account cannot be resolved are
      dropped and counted (see ``aggregation.LineIntegrity``).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ledger_kernel.domain.amounts import ZERO, round_amount
from ledger_kernel.domain.records import (
    CASH_BANK_TYPES,
    AccountRecord,
    DateRange,
    JournalLineRecord,
    JournalRecord,
)
from ledger_kernel.logging_config import get_logger
from ledger_engines.aggregation import (
    integrity_from_counter,
    iter_qualifying_lines,
    log_integrity,
)
from ledger_engines.tracer import traced_engine

logger = get_logger("engines.day_book")

VOUCHER_TYPE_JOURNAL = "Journal"
DEFAULT_PARTICULARS = "Entry"


@dataclass(frozen=True)
class DayBookRow:
    """One day-book line."""

    date: date
    particulars: str
    voucher_type: str
    voucher_number: str
    account_name: str
    debit: Decimal
    credit: Decimal
    balance: Decimal
    journal_id: str
    line_id: str


def voucher_number_for(journal: JournalRecord) -> str:
    """Journal number, or ``JNL-<journal id>`` when none was assigned."""
    return journal.journal_number or f"JNL-{journal.journal_id}"


def particulars_for(
    journal: JournalRecord,
    line: JournalLineRecord,
    default: str = DEFAULT_PARTICULARS,
) -> str:
    return journal.narration or line.line_narration or default


@traced_engine(
    "day_book", "1.0",
    fingerprint_fields=("journals", "lines", "accounts", "date_range", "account_types"),
)
def build_day_book(
    journals: Sequence[JournalRecord],
    lines: Sequence[JournalLineRecord],
    accounts: Sequence[AccountRecord],
    date_range: DateRange | None = None,
    account_types: Collection[str] = CASH_BANK_TYPES,
    default_particulars: str = DEFAULT_PARTICULARS,
) -> tuple[DayBookRow, ...]:
    """
    Build day-book rows with a per-day running balance.

    Args:
        journals: Journals of the period, in presentation order.
        lines: Their lines.
        accounts: Chart of accounts used to resolve names and types.
        date_range: Optional inclusive period on journal_date.
        account_types: Account types that belong in the day book.
        default_particulars: Text used when neither narration is set.

    Returns:
        Rows sorted by date. Empty tuple for empty input.
    """
    counter: Counter = Counter()
    entries = [
        (q.journal, q.line, q.account)
        for q in iter_qualifying_lines(
            lines, accounts, journals,
            date_range=date_range,
            account_types=account_types,
            require_journal=True,
            counter=counter,
        )
    ]
    # sorted() is stable, so same-day entries keep journal then line order
    entries = sorted(entries, key=lambda e: e[0].journal_date)

    rows: list[DayBookRow] = []
    current_day: date | None = None
    running = ZERO
    for journal, line, account in entries:
        if journal.journal_date != current_day:
            current_day = journal.journal_date
            running = ZERO
        running += line.debit - line.credit
        rows.append(
            DayBookRow(
                date=journal.journal_date,
                particulars=particulars_for(journal, line, default_particulars),
                voucher_type=VOUCHER_TYPE_JOURNAL,
                voucher_number=voucher_number_for(journal),
                account_name=account.name,
                debit=round_amount(line.debit),
                credit=round_amount(line.credit),
                balance=round_amount(running),
                journal_id=journal.journal_id,
                line_id=line.line_id,
            )
        )

    integrity = integrity_from_counter(counter)
    log_integrity("day_book", integrity)
    logger.info(
        "day_book_built",
        extra={
            "row_count": len(rows),
            "day_count": len({r.date for r in rows}),
            "lines_total": integrity.total,
        },
    )
    return tuple(rows)
