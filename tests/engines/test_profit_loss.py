"""Tests for the profit & loss summary."""

from datetime import date
from decimal import Decimal

from ledger_engines.profit_loss import compute_profit_and_loss
from ledger_kernel.domain.records import (
    AccountRecord,
    DateRange,
    JournalLineRecord,
    JournalRecord,
    JournalStatus,
)

ACCOUNTS = (
    AccountRecord("cash", "1000", "Cash", "Cash"),
    AccountRecord("sales", "4000", "Sales", "Income"),
    AccountRecord("services", "4100", "Services", "income"),
    AccountRecord("rent", "5000", "Rent", "Expense"),
)


def _journal(journal_id, day):
    return JournalRecord(
        journal_id=journal_id,
        journal_date=day,
        narration=None,
        status=JournalStatus.POSTED,
        user_id="u1",
    )


def _line(line_id, journal_id, account_id, debit="0", credit="0"):
    return JournalLineRecord(
        line_id=line_id,
        journal_id=journal_id,
        account_id=account_id,
        debit=Decimal(debit),
        credit=Decimal(credit),
    )


JOURNALS = (
    _journal("j1", date(2024, 4, 5)),
    _journal("j2", date(2024, 4, 20)),
    _journal("j3", date(2024, 5, 2)),
)

LINES = (
    _line("l1", "j1", "cash", debit="1000"),
    _line("l2", "j1", "sales", credit="1000"),
    _line("l3", "j2", "rent", debit="300"),
    _line("l4", "j2", "cash", credit="300"),
    _line("l5", "j3", "cash", debit="200"),
    _line("l6", "j3", "services", credit="250"),
    _line("l7", "j3", "sales", debit="50"),
)


class TestProfitAndLoss:
    def test_totals_and_net_profit(self):
        pnl = compute_profit_and_loss(journals=JOURNALS, lines=LINES, accounts=ACCOUNTS)

        assert pnl.total_income == Decimal("1200.00")
        assert pnl.total_expenses == Decimal("300.00")
        assert pnl.net_profit == Decimal("900.00")

    def test_monthly_breakdown_sorted(self):
        pnl = compute_profit_and_loss(journals=JOURNALS, lines=LINES, accounts=ACCOUNTS)

        assert [m.month for m in pnl.months] == ["2024-04", "2024-05"]
        april, may = pnl.months
        assert april.total_income == Decimal("1000.00")
        assert april.total_expenses == Decimal("300.00")
        assert april.net_profit == Decimal("700.00")
        assert may.total_income == Decimal("200.00")

    def test_account_summaries(self):
        pnl = compute_profit_and_loss(journals=JOURNALS, lines=LINES, accounts=ACCOUNTS)

        by_id = {a.account_id: a for a in pnl.accounts}
        assert set(by_id) == {"sales", "services", "rent"}
        assert by_id["sales"].total == Decimal("950.00")
        assert by_id["sales"].transaction_count == 2
        assert [a.account_id for a in pnl.income_accounts()] == ["sales", "services"]
        assert [a.account_id for a in pnl.expense_accounts()] == ["rent"]

    def test_date_range(self):
        pnl = compute_profit_and_loss(
            journals=JOURNALS, lines=LINES, accounts=ACCOUNTS,
            date_range=DateRange(start=date(2024, 5, 1)),
        )

        assert pnl.total_income == Decimal("200.00")
        assert pnl.total_expenses == Decimal("0.00")
        assert [m.month for m in pnl.months] == ["2024-05"]

    def test_empty(self):
        pnl = compute_profit_and_loss(journals=[], lines=[], accounts=ACCOUNTS)

        assert pnl.months == ()
        assert pnl.net_profit == Decimal("0")
