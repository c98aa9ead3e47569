"""
Module: ledger_engines.aging
Responsibility:
    Compute how many days an outstanding invoice or purchase bill is past
    its due date and classify it into aging buckets, for receivable and
    payable aging reports.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import ledger_kernel/domain and ledger_kernel/logging_config.

Invariants enforced:
    - Purity: the as-of date is a parameter; this module never reads a clock.
    - Decimal-only arithmetic for amounts.
    - Days past due are never negative; a document not yet due is in the
      first bucket.
    - Each non-negative day count maps to exactly one bucket of a
      well-formed bucket sequence.

Failure modes:
    - ValueError when a bucket is malformed or a day count fits no bucket.

Usage:
    from ledger_engines.aging import compute_aging_report, days_past_due, classify
    from datetime import date

    days = days_past_due(due_date=date(2024, 1, 1), as_of=date(2024, 2, 15))  # 45
    bucket = classify(days)  # AgeBucket("31-60", 31, 60)
"""

from __future__ import annotations

import math
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from ledger_kernel.domain.amounts import ZERO, round_amount
from ledger_kernel.domain.records import DocumentKind, OutstandingDocument
from ledger_kernel.logging_config import get_logger
from ledger_engines.tracer import traced_engine

logger = get_logger("engines.aging")

_SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class AgeBucket:
    """
    A contiguous range of days past due.

    Guarantees:
        - min_days >= 0.
        - max_days >= min_days when bounded.
    """

    name: str
    min_days: int
    max_days: int | None  # None = unbounded (e.g. >90)

    def __post_init__(self) -> None:
        if self.min_days < 0:
            raise ValueError("min_days cannot be negative")
        if self.max_days is not None and self.max_days < self.min_days:
            raise ValueError("max_days cannot be less than min_days")

    def contains(self, days: int) -> bool:
        if days < self.min_days:
            return False
        if self.max_days is None:
            return True
        return days <= self.max_days

    @property
    def is_unbounded(self) -> bool:
        return self.max_days is None


STANDARD_BUCKETS: tuple[AgeBucket, ...] = (
    AgeBucket("0-30", 0, 30),
    AgeBucket("31-60", 31, 60),
    AgeBucket("61-90", 61, 90),
    AgeBucket(">90", 91, None),
)

DEFAULT_SETTLED_STATUSES: tuple[str, ...] = ("paid",)


def days_past_due(due_date: date, as_of: date | datetime) -> int:
    """
    Days between ``due_date`` and ``as_of``, floored at zero.

    With a ``date`` the count is whole days.  With a ``datetime`` the due
    date is taken at midnight in the same timezone and any partial day
    counts as a full one.
    """
    if isinstance(as_of, datetime):
        due_at = datetime.combine(due_date, time.min, tzinfo=as_of.tzinfo)
        elapsed = (as_of - due_at) / timedelta(seconds=1)
        days = math.ceil(elapsed / _SECONDS_PER_DAY)
    else:
        days = (as_of - due_date).days
    return max(0, days)


def classify(days: int, buckets: Sequence[AgeBucket] = STANDARD_BUCKETS) -> AgeBucket:
    """
    Return the bucket containing ``days``.

    Negative counts map to the bucket starting at zero, or the first one.

    Raises:
        ValueError: If ``days`` fits no bucket.
    """
    if days < 0:
        for bucket in buckets:
            if bucket.min_days == 0:
                return bucket
        return buckets[0]

    for bucket in buckets:
        if bucket.contains(days):
            return bucket

    logger.warning("aging_classification_no_bucket", extra={
        "days_past_due": days,
        "bucket_count": len(buckets),
    })
    raise ValueError(f"{days} days past due does not fit any bucket")


def validate_buckets(buckets: Sequence[AgeBucket]) -> None:
    """
    Check that ``buckets`` start at zero, are contiguous and end unbounded.

    Raises:
        ValueError: On an empty, gapped, overlapping or bounded sequence.
    """
    if not buckets:
        raise ValueError("at least one aging bucket is required")
    if buckets[0].min_days != 0:
        raise ValueError("the first aging bucket must start at 0 days")
    for previous, current in zip(buckets, buckets[1:]):
        if previous.max_days is None or current.min_days != previous.max_days + 1:
            raise ValueError(
                f"aging buckets {previous.name!r} and {current.name!r} are not contiguous"
            )
    if not buckets[-1].is_unbounded:
        raise ValueError("the last aging bucket must be unbounded")
    if len({b.name for b in buckets}) != len(buckets):
        raise ValueError("aging bucket names must be unique")


@dataclass(frozen=True)
class AgingRow:
    """One outstanding document with its age classification."""

    document_id: str
    kind: DocumentKind
    name: str
    document_number: str
    due_date: date
    amount: Decimal
    days_past_due: int
    bucket: AgeBucket


@dataclass(frozen=True)
class AgingReport:
    """
    Aging snapshot as of one date.

    Guarantees:
        - ``total_amount()`` equals the sum of row amounts.
        - ``total_by_bucket()`` has an entry for every bucket.
    """

    as_of: date
    buckets: tuple[AgeBucket, ...]
    rows: tuple[AgingRow, ...]
    kind: DocumentKind | None = None

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def rows_in_bucket(self, bucket_name: str) -> tuple[AgingRow, ...]:
        return tuple(r for r in self.rows if r.bucket.name == bucket_name)

    def total_amount(self) -> Decimal:
        return sum((r.amount for r in self.rows), ZERO)

    def total_by_bucket(self) -> dict[str, Decimal]:
        """Sum of amounts per bucket, in bucket order, zero where empty."""
        result = {b.name: ZERO for b in self.buckets}
        for row in self.rows:
            result[row.bucket.name] += row.amount
        return result

    def total_by_party(self) -> dict[str, dict[str, Decimal]]:
        """Per client or vendor name, the sum of amounts per bucket."""
        result: dict[str, dict[str, Decimal]] = {}
        for row in self.rows:
            if row.name not in result:
                result[row.name] = {b.name: ZERO for b in self.buckets}
            result[row.name][row.bucket.name] += row.amount
        return result


@traced_engine(
    "aging", "1.0",
    fingerprint_fields=("documents", "as_of", "buckets", "settled_statuses", "aged_statuses"),
)
def compute_aging_report(
    documents: Sequence[OutstandingDocument],
    as_of: date | datetime,
    buckets: Sequence[AgeBucket] = STANDARD_BUCKETS,
    settled_statuses: Collection[str] = DEFAULT_SETTLED_STATUSES,
    aged_statuses: Collection[str] | None = None,
) -> AgingReport:
    """
    Classify outstanding documents into aging buckets.

    Preconditions:
        - ``buckets`` form a contiguous sequence starting at zero.

    Postconditions:
        - One row per document whose status is not settled (and, when
          ``aged_statuses`` is given, is one of them), in input order.
        - ``row.amount`` is ``total_amount - settled_amount``.

    Args:
        documents: Receivables or payables, already scoped to one user.
        as_of: Reference date; a datetime rounds partial days up.
        buckets: Aging buckets.
        settled_statuses: Statuses (case-insensitive) that are not aged.
        aged_statuses: Optional whitelist (case-insensitive); documents with
            any other status are not aged.
    """
    settled = {s.strip().lower() for s in settled_statuses}
    allowed = None if aged_statuses is None else {s.strip().lower() for s in aged_statuses}
    bucket_seq = tuple(buckets)

    rows: list[AgingRow] = []
    skipped = 0
    kinds: set[DocumentKind] = set()
    for doc in documents:
        status = doc.status.strip().lower()
        if status in settled or (allowed is not None and status not in allowed):
            skipped += 1
            continue
        days = days_past_due(doc.due_date, as_of)
        kinds.add(doc.kind)
        rows.append(
            AgingRow(
                document_id=doc.document_id,
                kind=doc.kind,
                name=doc.party_name,
                document_number=doc.document_number,
                due_date=doc.due_date,
                amount=round_amount(doc.amount_due),
                days_past_due=days,
                bucket=classify(days, bucket_seq),
            )
        )

    as_of_day = as_of.date() if isinstance(as_of, datetime) else as_of
    report = AgingReport(
        as_of=as_of_day,
        buckets=bucket_seq,
        rows=tuple(rows),
        kind=next(iter(kinds)) if len(kinds) == 1 else None,
    )

    logger.info("aging_report_computed", extra={
        "as_of": as_of_day.isoformat(),
        "document_count": len(documents),
        "row_count": len(rows),
        "status_skipped": skipped,
        "total_amount": str(report.total_amount()),
    })
    return report
