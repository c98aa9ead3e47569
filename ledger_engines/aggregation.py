"""
Module: ledger_engines.aggregation
Responsibility:
    Group journal lines by account and sum their debit and credit columns,
    restricted to a reporting period and, optionally, to a set of account
    types.  This is the shared core of the trial balance, the day book, the
    account ledger and the profit & loss summary.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import ledger_kernel/domain and ledger_kernel/logging_config.

Invariants enforced:
    - Purity: inputs are never mutated; same inputs give the same outputs.
    - Decimal-only arithmetic; sums are exact and rounded to two places
      only when a row is emitted.
    - Lines are filtered, never rejected: unlinked lines, lines pointing at
      an unknown account or journal, out-of-range and type-filtered lines
      are dropped and counted in ``LineIntegrity``.
    - Lines with both sides set are summed on both sides.

Failure modes:
    - None raised.  Empty inputs produce an empty result.

Usage:
    from ledger_engines.aggregation import aggregate_account_totals
    from ledger_kernel.domain.records import DateRange

    result = aggregate_account_totals(
        lines=lines,
        accounts=accounts,
        journals=journals,
        date_range=DateRange(start=date(2024, 4, 1), end=date(2025, 3, 31)),
        account_types={"cash", "bank"},
    )
    for row in result.rows:
        print(row.code, row.debit_total, row.credit_total)
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Collection, Iterator, Sequence
from dataclasses import dataclass
from decimal import Decimal

from ledger_kernel.domain.amounts import ZERO, round_amount
from ledger_kernel.domain.records import (
    AccountRecord,
    DateRange,
    JournalLineRecord,
    JournalRecord,
    normalize_type,
)
from ledger_kernel.logging_config import get_logger
from ledger_engines.tracer import traced_engine

logger = get_logger("engines.aggregation")


@dataclass(frozen=True)
class LineIntegrity:
    """
    Diagnostic counters for one pass over a set of journal lines.

    Every line lands in exactly one of ``retained``, ``unlinked``,
    ``unknown_account``, ``unknown_journal``, ``out_of_range`` or
    ``filtered_by_type``.  ``both_sides``, ``neither_side`` and
    ``negative_amount`` describe the retained lines only.
    """

    total: int = 0
    retained: int = 0
    unlinked: int = 0
    unknown_account: int = 0
    unknown_journal: int = 0
    out_of_range: int = 0
    filtered_by_type: int = 0
    both_sides: int = 0
    neither_side: int = 0
    negative_amount: int = 0

    @property
    def dropped(self) -> int:
        return self.total - self.retained

    @property
    def malformed(self) -> int:
        """Retained lines that do not have exactly one non-zero side."""
        return self.both_sides + self.neither_side

    def as_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "retained": self.retained,
            "unlinked": self.unlinked,
            "unknown_account": self.unknown_account,
            "unknown_journal": self.unknown_journal,
            "out_of_range": self.out_of_range,
            "filtered_by_type": self.filtered_by_type,
            "both_sides": self.both_sides,
            "neither_side": self.neither_side,
            "negative_amount": self.negative_amount,
        }


@dataclass(frozen=True)
class QualifiedLine:
    """A retained line together with its resolved journal and account."""

    line: JournalLineRecord
    journal: JournalRecord | None
    account: AccountRecord


@dataclass(frozen=True)
class AccountTotalsRow:
    """Summed debit and credit for one account over a reporting period."""

    account_id: str
    code: str
    name: str
    account_type: str
    debit_total: Decimal
    credit_total: Decimal
    line_count: int = 0

    @property
    def balance(self) -> Decimal:
        """Net balance (debits - credits)."""
        return self.debit_total - self.credit_total


@dataclass(frozen=True)
class AggregationResult:
    """Ordered per-account rows plus the integrity diagnostic."""

    rows: tuple[AccountTotalsRow, ...]
    integrity: LineIntegrity

    @property
    def total_debit(self) -> Decimal:
        return sum((r.debit_total for r in self.rows), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((r.credit_total for r in self.rows), ZERO)

    def row_for(self, account_id: str) -> AccountTotalsRow | None:
        for row in self.rows:
            if row.account_id == account_id:
                return row
        return None


def _normalized_filter(account_types: Collection[str] | None) -> frozenset[str] | None:
    if account_types is None:
        return None
    return frozenset(normalize_type(t) for t in account_types)


def group_lines_by_journal(
    lines: Sequence[JournalLineRecord],
) -> dict[str, list[JournalLineRecord]]:
    """Group lines by parent journal id, keeping first-seen order."""
    grouped: dict[str, list[JournalLineRecord]] = {}
    for line in lines:
        grouped.setdefault(line.journal_id, []).append(line)
    return grouped


def iter_qualifying_lines(
    lines: Sequence[JournalLineRecord],
    accounts: Sequence[AccountRecord],
    journals: Sequence[JournalRecord] = (),
    date_range: DateRange | None = None,
    account_types: Collection[str] | None = None,
    require_journal: bool = False,
    counter: Counter | None = None,
) -> Iterator[QualifiedLine]:
    """
    Yield the lines that survive the aggregation filters.

    Iteration follows journal order (as given), then line order within each
    journal; lines of journals missing from ``journals`` follow in
    first-seen order when ``require_journal`` is False.

    A line's journal must be known when ``require_journal`` is set or the
    date range has a bound; otherwise it is dropped as ``unknown_journal``.

    Args:
        counter: Optional ``Counter`` that receives one increment per line
            under the reason it was dropped, or under ``retained``.
    """
    counts = counter if counter is not None else Counter()
    journal_by_id = {j.journal_id: j for j in journals}
    account_by_id = {a.account_id: a for a in accounts}
    type_filter = _normalized_filter(account_types)
    needs_journal = require_journal or (date_range is not None and date_range.is_bounded)

    grouped = group_lines_by_journal(lines)
    ordered_ids = [j.journal_id for j in journals if j.journal_id in grouped]
    seen = set(ordered_ids)
    ordered_ids.extend(jid for jid in grouped if jid not in seen)

    for journal_id in ordered_ids:
        journal = journal_by_id.get(journal_id)
        for line in grouped[journal_id]:
            counts["total"] += 1
            if not line.is_linked:
                counts["unlinked"] += 1
                continue
            account = account_by_id.get(line.account_id)
            if account is None:
                counts["unknown_account"] += 1
                continue
            if journal is None and needs_journal:
                counts["unknown_journal"] += 1
                continue
            if (
                journal is not None
                and date_range is not None
                and not date_range.contains(journal.journal_date)
            ):
                counts["out_of_range"] += 1
                continue
            if type_filter is not None and account.normalized_type not in type_filter:
                counts["filtered_by_type"] += 1
                continue

            counts["retained"] += 1
            if line.has_both_sides:
                counts["both_sides"] += 1
            elif line.is_empty:
                counts["neither_side"] += 1
            if line.debit < ZERO or line.credit < ZERO:
                counts["negative_amount"] += 1

            yield QualifiedLine(line=line, journal=journal, account=account)


def integrity_from_counter(counter: Counter) -> LineIntegrity:
    """Freeze a counter filled by ``iter_qualifying_lines``."""
    return LineIntegrity(**{name: counter.get(name, 0) for name in LineIntegrity().as_dict()})


def log_integrity(engine: str, integrity: LineIntegrity) -> None:
    """Emit the integrity counters; warn when malformed lines were kept."""
    logger.debug(
        "line_integrity",
        extra={"engine": engine, **integrity.as_dict()},
    )
    if integrity.malformed or integrity.unknown_account or integrity.negative_amount:
        logger.warning(
            "line_integrity_issues",
            extra={
                "engine": engine,
                "both_sides": integrity.both_sides,
                "neither_side": integrity.neither_side,
                "unknown_account": integrity.unknown_account,
                "negative_amount": integrity.negative_amount,
            },
        )


@traced_engine(
    "aggregation", "1.0",
    fingerprint_fields=("lines", "accounts", "journals", "date_range", "account_types"),
)
def aggregate_account_totals(
    lines: Sequence[JournalLineRecord],
    accounts: Sequence[AccountRecord],
    journals: Sequence[JournalRecord] = (),
    date_range: DateRange | None = None,
    account_types: Collection[str] | None = None,
    include_all_accounts: bool = False,
) -> AggregationResult:
    """
    Sum debits and credits per account.

    Preconditions:
        - Inputs are already scoped to one user.
        - Amounts are sanitized Decimals; negative values are summed as-is.

    Postconditions:
        - One row per account with a non-zero sum, or one row per chart
          account (matching ``account_types``) when ``include_all_accounts``.
        - Rows ordered by account code; ties keep chart order.
        - ``sum(debit_total + credit_total)`` over rows equals
          ``sum(debit + credit)`` over retained lines (before rounding).

    Args:
        lines: Journal lines to aggregate.
        accounts: The chart of accounts.
        journals: Journals the lines belong to; needed for date filtering.
        date_range: Optional inclusive period on journal_date.
        account_types: Optional case-insensitive account type whitelist.
        include_all_accounts: Emit zero rows for accounts with no activity.
    """
    counter: Counter = Counter()
    debit_sum: dict[str, Decimal] = {}
    credit_sum: dict[str, Decimal] = {}
    line_count: Counter = Counter()

    for q in iter_qualifying_lines(
        lines, accounts, journals,
        date_range=date_range,
        account_types=account_types,
        counter=counter,
    ):
        account_id = q.account.account_id
        debit_sum[account_id] = debit_sum.get(account_id, ZERO) + q.line.debit
        credit_sum[account_id] = credit_sum.get(account_id, ZERO) + q.line.credit
        line_count[account_id] += 1

    type_filter = _normalized_filter(account_types)
    rows: list[AccountTotalsRow] = []
    for account in sorted(accounts, key=lambda a: a.code):
        debit = debit_sum.get(account.account_id, ZERO)
        credit = credit_sum.get(account.account_id, ZERO)
        if include_all_accounts:
            if type_filter is not None and account.normalized_type not in type_filter:
                continue
        elif debit == ZERO and credit == ZERO:
            continue
        rows.append(
            AccountTotalsRow(
                account_id=account.account_id,
                code=account.code,
                name=account.name,
                account_type=account.account_type,
                debit_total=round_amount(debit),
                credit_total=round_amount(credit),
                line_count=line_count[account.account_id],
            )
        )

    integrity = integrity_from_counter(counter)
    log_integrity("aggregation", integrity)
    logger.info(
        "aggregation_completed",
        extra={
            "account_rows": len(rows),
            "lines_total": integrity.total,
            "lines_retained": integrity.retained,
            "include_all_accounts": include_all_accounts,
        },
    )

    return AggregationResult(rows=tuple(rows), integrity=integrity)
