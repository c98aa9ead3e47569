"""
Report DTOs returned by ``ReportingService``.

Each report pairs the engine result with metadata describing who it was
generated for, over which period and when.  All DTOs are frozen.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from ledger_engines.account_ledger import AccountLedger
from ledger_engines.aging import AgingReport
from ledger_engines.day_book import DayBookRow
from ledger_engines.profit_loss import ProfitAndLoss
from ledger_engines.trial_balance import TrialBalance
from ledger_kernel.domain.records import DocumentKind


class ReportType(str, Enum):
    TRIAL_BALANCE = "trial_balance"
    DAY_BOOK = "day_book"
    ACCOUNT_LEDGER = "account_ledger"
    PROFIT_AND_LOSS = "profit_and_loss"
    AGING = "aging"


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata attached to every report."""

    report_type: ReportType
    entity_name: str
    currency: str
    user_id: str
    generated_at: str  # ISO format timestamp from injected clock
    period_start: date | None = None
    period_end: date | None = None
    as_of_date: date | None = None


@dataclass(frozen=True)
class TrialBalanceReport:
    metadata: ReportMetadata
    trial_balance: TrialBalance


@dataclass(frozen=True)
class DayBookReport:
    metadata: ReportMetadata
    rows: tuple[DayBookRow, ...]


@dataclass(frozen=True)
class AccountLedgerReport:
    metadata: ReportMetadata
    ledger: AccountLedger


@dataclass(frozen=True)
class ProfitAndLossReport:
    metadata: ReportMetadata
    profit_and_loss: ProfitAndLoss


@dataclass(frozen=True)
class AgingSummaryReport:
    metadata: ReportMetadata
    kind: DocumentKind
    aging: AgingReport
