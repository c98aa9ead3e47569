"""
Module: ledger_engines.profit_loss
Responsibility:
    Summarize Income and Expense activity from journal lines: totals for
    the period, a month-by-month breakdown and a per-account summary.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Income accounts contribute (credit - debit); Expense accounts
      contribute (debit - credit).  Other account types are ignored.
    - net_profit = total_income - total_expenses, both over the period and
      for each month.
    - Sum of monthly income equals total_income (before rounding).

Failure modes:
    - None raised.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from ledger_kernel.domain.amounts import ZERO, round_amount
from ledger_kernel.domain.records import (
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

logger = get_logger("engines.profit_loss")

INCOME_TYPE = "income"
EXPENSE_TYPE = "expense"


@dataclass(frozen=True)
class MonthlyProfit:
    month: str  # YYYY-MM
    total_income: Decimal
    total_expenses: Decimal

    @property
    def net_profit(self) -> Decimal:
        return self.total_income - self.total_expenses


@dataclass(frozen=True)
class AccountSummary:
    account_id: str
    name: str
    account_type: str
    total: Decimal
    transaction_count: int


@dataclass(frozen=True)
class ProfitAndLoss:
    months: tuple[MonthlyProfit, ...]
    accounts: tuple[AccountSummary, ...]
    total_income: Decimal
    total_expenses: Decimal

    @property
    def net_profit(self) -> Decimal:
        return self.total_income - self.total_expenses

    def income_accounts(self) -> tuple[AccountSummary, ...]:
        return tuple(a for a in self.accounts if a.account_type == INCOME_TYPE)

    def expense_accounts(self) -> tuple[AccountSummary, ...]:
        return tuple(a for a in self.accounts if a.account_type == EXPENSE_TYPE)


@traced_engine(
    "profit_loss", "1.0",
    fingerprint_fields=("journals", "lines", "accounts", "date_range"),
)
def compute_profit_and_loss(
    journals: Sequence[JournalRecord],
    lines: Sequence[JournalLineRecord],
    accounts: Sequence[AccountRecord],
    date_range: DateRange | None = None,
) -> ProfitAndLoss:
    """
    Compute income, expenses and net profit.

    Lines are dated by their journal, so lines of unknown journals are
    dropped.  Account summaries are ordered by account code; months
    ascending.
    """
    counter: Counter = Counter()
    month_income: dict[str, Decimal] = {}
    month_expense: dict[str, Decimal] = {}
    account_total: dict[str, Decimal] = {}
    account_count: Counter = Counter()

    for q in iter_qualifying_lines(
        lines, accounts, journals,
        date_range=date_range,
        account_types=(INCOME_TYPE, EXPENSE_TYPE),
        require_journal=True,
        counter=counter,
    ):
        month = q.journal.journal_date.strftime("%Y-%m")
        if q.account.normalized_type == INCOME_TYPE:
            amount = q.line.credit - q.line.debit
            month_income[month] = month_income.get(month, ZERO) + amount
        else:
            amount = q.line.debit - q.line.credit
            month_expense[month] = month_expense.get(month, ZERO) + amount
        account_id = q.account.account_id
        account_total[account_id] = account_total.get(account_id, ZERO) + amount
        account_count[account_id] += 1

    months = tuple(
        MonthlyProfit(
            month=month,
            total_income=round_amount(month_income.get(month, ZERO)),
            total_expenses=round_amount(month_expense.get(month, ZERO)),
        )
        for month in sorted(set(month_income) | set(month_expense))
    )

    summaries = tuple(
        AccountSummary(
            account_id=a.account_id,
            name=a.name,
            account_type=a.normalized_type,
            total=round_amount(account_total[a.account_id]),
            transaction_count=account_count[a.account_id],
        )
        for a in sorted(accounts, key=lambda a: a.code)
        if a.account_id in account_total
    )

    total_income = round_amount(sum(month_income.values(), ZERO))
    total_expenses = round_amount(sum(month_expense.values(), ZERO))

    integrity = integrity_from_counter(counter)
    log_integrity("profit_loss", integrity)
    logger.info("profit_and_loss_computed", extra={
        "month_count": len(months),
        "account_count": len(summaries),
        "total_income": str(total_income),
        "total_expenses": str(total_expenses),
    })

    return ProfitAndLoss(
        months=months,
        accounts=summaries,
        total_income=total_income,
        total_expenses=total_expenses,
    )
