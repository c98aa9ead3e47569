"""
Module: ledger_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.  This is the import surface for ledger_reports.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import ledger_kernel.domain and ledger_kernel.logging_config.
    MUST NOT import SQLAlchemy, selectors or ledger_reports.

Invariants enforced:
    - Purity: engines never call ``datetime.now()`` or ``date.today()``;
      as-of dates are explicit parameters.
    - Decimal-only arithmetic.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from ledger_engines import compute_trial_balance, build_day_book
    from ledger_engines import compute_aging_report, STANDARD_BUCKETS
"""

from ledger_engines.account_ledger import (
    AccountLedger,
    AccountLedgerRow,
    build_account_ledger,
)
from ledger_engines.aggregation import (
    AccountTotalsRow,
    AggregationResult,
    LineIntegrity,
    aggregate_account_totals,
)
from ledger_engines.aging import (
    STANDARD_BUCKETS,
    AgeBucket,
    AgingReport,
    AgingRow,
    classify,
    compute_aging_report,
    days_past_due,
    validate_buckets,
)
from ledger_engines.day_book import DayBookRow, build_day_book
from ledger_engines.profit_loss import (
    AccountSummary,
    MonthlyProfit,
    ProfitAndLoss,
    compute_profit_and_loss,
)
from ledger_engines.trial_balance import (
    TrialBalance,
    compute_trial_balance,
    verify_balance,
)

__all__ = [
    # Aggregation
    "AccountTotalsRow",
    "AggregationResult",
    "LineIntegrity",
    "aggregate_account_totals",
    # Day book
    "DayBookRow",
    "build_day_book",
    # Trial balance
    "TrialBalance",
    "compute_trial_balance",
    "verify_balance",
    # Aging
    "STANDARD_BUCKETS",
    "AgeBucket",
    "AgingReport",
    "AgingRow",
    "classify",
    "compute_aging_report",
    "days_past_due",
    "validate_buckets",
    # Account ledger
    "AccountLedger",
    "AccountLedgerRow",
    "build_account_ledger",
    # Profit & loss
    "AccountSummary",
    "MonthlyProfit",
    "ProfitAndLoss",
    "compute_profit_and_loss",
]
