"""
Tests for the trial balance and balance verifier.

Covers:
- The Cash / Sales / Rent / Bank scenario
- Zero-activity accounts
- Tolerance boundary
- Dropped lines do not unbalance the report
"""

from decimal import Decimal

import pytest

from ledger_engines.trial_balance import compute_trial_balance, verify_balance
from ledger_kernel.domain.records import AccountRecord, JournalLineRecord

ACCOUNTS = (
    AccountRecord("sales", "4000", "Sales", "Income"),
    AccountRecord("cash", "1000", "Cash", "Cash"),
    AccountRecord("bank", "1010", "Bank", "Bank"),
    AccountRecord("rent", "5000", "Rent", "Expense"),
    AccountRecord("equity", "3000", "Capital", "Equity"),
)


def _line(line_id, account_id, debit="0", credit="0", journal_id="j1"):
    return JournalLineRecord(
        line_id=line_id,
        journal_id=journal_id,
        account_id=account_id,
        debit=Decimal(debit),
        credit=Decimal(credit),
    )


SCENARIO_LINES = (
    _line("l1", "cash", debit="500"),
    _line("l2", "sales", credit="500"),
    _line("l3", "rent", debit="200", journal_id="j2"),
    _line("l4", "bank", credit="200", journal_id="j2"),
)


class TestTrialBalance:
    """Tests for compute_trial_balance."""

    def test_scenario_balances_at_700(self):
        tb = compute_trial_balance(accounts=ACCOUNTS, lines=SCENARIO_LINES)

        by_id = {r.account_id: r for r in tb.rows}
        assert by_id["cash"].debit_total == Decimal("500.00")
        assert by_id["sales"].credit_total == Decimal("500.00")
        assert by_id["rent"].debit_total == Decimal("200.00")
        assert by_id["bank"].credit_total == Decimal("200.00")
        assert tb.total_debit == Decimal("700.00")
        assert tb.total_credit == Decimal("700.00")
        assert tb.is_balanced is True
        assert tb.difference == Decimal("0")

    def test_every_account_listed_in_code_order(self):
        tb = compute_trial_balance(accounts=ACCOUNTS, lines=SCENARIO_LINES)

        assert [r.code for r in tb.rows] == ["1000", "1010", "3000", "4000", "5000"]
        equity = tb.rows[2]
        assert equity.debit_total == Decimal("0.00")
        assert equity.credit_total == Decimal("0.00")

    def test_unbalanced_ledger_reported(self, captured_logs):
        lines = [_line("l1", "cash", debit="100"), _line("l2", "sales", credit="90")]

        tb = compute_trial_balance(accounts=ACCOUNTS, lines=lines)

        assert tb.is_balanced is False
        assert tb.difference == Decimal("10.00")
        assert any(r["message"] == "trial_balance_not_balanced" for r in captured_logs())

    def test_unlinked_line_ignored(self):
        lines = list(SCENARIO_LINES) + [_line("l5", None, debit="999")]

        tb = compute_trial_balance(accounts=ACCOUNTS, lines=lines)

        assert tb.is_balanced is True
        assert tb.integrity.unlinked == 1

    def test_empty_ledger_is_balanced(self):
        tb = compute_trial_balance(accounts=ACCOUNTS, lines=[])

        assert tb.total_debit == Decimal("0")
        assert tb.is_balanced is True
        assert len(tb.rows) == len(ACCOUNTS)

    def test_idempotent(self):
        first = compute_trial_balance(accounts=ACCOUNTS, lines=SCENARIO_LINES)
        second = compute_trial_balance(accounts=ACCOUNTS, lines=SCENARIO_LINES)

        assert first == second


class TestVerifyBalance:
    """Tests for the half-cent tolerance."""

    @pytest.mark.parametrize(
        "debit,credit,expected",
        [
            ("100.00", "100.00", True),
            ("100.004", "100.00", True),
            ("100.005", "100.00", False),
            ("100.00", "100.01", False),
        ],
    )
    def test_tolerance(self, debit, credit, expected):
        assert verify_balance(Decimal(debit), Decimal(credit)) is expected

    def test_custom_tolerance(self):
        assert verify_balance(Decimal("1.00"), Decimal("1.50"), Decimal("1")) is True
