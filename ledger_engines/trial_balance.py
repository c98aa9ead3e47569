"""
Module: ledger_engines.trial_balance
Responsibility:
    Produce the trial balance: every account of the chart with its summed
    debits and credits over the whole ledger, the two column totals, and
    whether they agree within a half-cent tolerance.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Every chart account appears, zero-activity accounts included, in
      account code order.
    - total_debit and total_credit are the sums of the (rounded) rows.
    - is_balanced  <=>  |total_debit - total_credit| < tolerance.

Failure modes:
    - None raised.  An unbalanced ledger is a result, not an error; it is
      logged at WARNING.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from ledger_kernel.domain.amounts import BALANCE_TOLERANCE, ZERO, is_within_tolerance
from ledger_kernel.domain.records import AccountRecord, JournalLineRecord
from ledger_kernel.logging_config import get_logger
from ledger_engines.aggregation import (
    AccountTotalsRow,
    LineIntegrity,
    aggregate_account_totals,
)
from ledger_engines.tracer import traced_engine

logger = get_logger("engines.trial_balance")


@dataclass(frozen=True)
class TrialBalance:
    rows: tuple[AccountTotalsRow, ...]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool
    difference: Decimal
    integrity: LineIntegrity


def verify_balance(
    total_debit: Decimal,
    total_credit: Decimal,
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> bool:
    """True when the two totals differ by strictly less than ``tolerance``."""
    return is_within_tolerance(total_debit, total_credit, tolerance)


@traced_engine("trial_balance", "1.0", fingerprint_fields=("accounts", "lines", "tolerance"))
def compute_trial_balance(
    accounts: Sequence[AccountRecord],
    lines: Sequence[JournalLineRecord],
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> TrialBalance:
    """
    Build the trial balance over all given lines.

    No date or account-type filter applies; lines without an account or
    pointing at an account outside ``accounts`` are dropped and counted.
    """
    result = aggregate_account_totals(
        lines=lines,
        accounts=accounts,
        include_all_accounts=True,
    )
    total_debit = sum((r.debit_total for r in result.rows), ZERO)
    total_credit = sum((r.credit_total for r in result.rows), ZERO)
    balanced = verify_balance(total_debit, total_credit, tolerance)
    difference = total_debit - total_credit

    if balanced:
        logger.info("trial_balance_computed", extra={
            "account_count": len(result.rows),
            "total_debit": str(total_debit),
            "total_credit": str(total_credit),
        })
    else:
        logger.warning("trial_balance_not_balanced", extra={
            "account_count": len(result.rows),
            "total_debit": str(total_debit),
            "total_credit": str(total_credit),
            "difference": str(difference),
        })

    return TrialBalance(
        rows=result.rows,
        total_debit=total_debit,
        total_credit=total_credit,
        is_balanced=balanced,
        difference=difference,
        integrity=result.integrity,
    )
