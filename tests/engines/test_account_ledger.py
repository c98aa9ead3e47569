"""Tests for the single-account running-balance ledger."""

from datetime import date, datetime
from decimal import Decimal

from ledger_engines.account_ledger import build_account_ledger
from ledger_kernel.domain.records import (
    AccountRecord,
    DateRange,
    JournalLineRecord,
    JournalRecord,
    JournalStatus,
)

CASH = AccountRecord("cash", "1000", "Cash", "Cash", opening_balance=Decimal("1000"))


def _journal(journal_id, day, narration="Entry", number=None):
    return JournalRecord(
        journal_id=journal_id,
        journal_date=day,
        narration=narration,
        status=JournalStatus.POSTED,
        user_id="u1",
        journal_number=number,
    )


def _line(line_id, journal_id, account_id="cash", debit="0", credit="0", created=None):
    return JournalLineRecord(
        line_id=line_id,
        journal_id=journal_id,
        account_id=account_id,
        debit=Decimal(debit),
        credit=Decimal(credit),
        created_at=created,
    )


class TestAccountLedger:
    def test_running_balance_starts_at_opening(self):
        journals = [
            _journal("j1", date(2024, 4, 1)),
            _journal("j2", date(2024, 4, 2)),
        ]
        lines = [
            _line("l1", "j1", debit="200"),
            _line("l2", "j2", credit="50"),
        ]

        ledger = build_account_ledger(account=CASH, journals=journals, lines=lines)

        assert [r.running_balance for r in ledger.rows] == [
            Decimal("1200.00"), Decimal("1150.00"),
        ]
        assert ledger.opening_balance == Decimal("1000.00")
        assert ledger.closing_balance == Decimal("1150.00")
        assert ledger.total_debit == Decimal("200.00")
        assert ledger.total_credit == Decimal("50.00")

    def test_running_balance_does_not_reset_daily(self):
        journals = [
            _journal("j1", date(2024, 4, 1)),
            _journal("j2", date(2024, 4, 2)),
        ]
        lines = [_line("l1", "j1", debit="100"), _line("l2", "j2", debit="50")]

        ledger = build_account_ledger(account=CASH, journals=journals, lines=lines)

        assert ledger.rows[-1].running_balance == Decimal("1150.00")

    def test_sorted_by_date_then_created_at(self):
        journals = [
            _journal("j2", date(2024, 4, 2)),
            _journal("j1", date(2024, 4, 1)),
        ]
        lines = [
            _line("late", "j1", debit="1", created=datetime(2024, 4, 1, 12)),
            _line("other", "j2", debit="1", created=datetime(2024, 4, 1, 8)),
            _line("early", "j1", debit="1", created=datetime(2024, 4, 1, 9)),
        ]

        ledger = build_account_ledger(account=CASH, journals=journals, lines=lines)

        assert [r.line_id for r in ledger.rows] == ["early", "late", "other"]

    def test_other_accounts_ignored(self):
        journals = [_journal("j1", date(2024, 4, 1))]
        lines = [_line("l1", "j1", debit="5"), _line("l2", "j1", account_id="bank", credit="5")]

        ledger = build_account_ledger(account=CASH, journals=journals, lines=lines)

        assert [r.line_id for r in ledger.rows] == ["l1"]

    def test_date_range_brings_prior_activity_forward(self):
        journals = [
            _journal("j1", date(2024, 3, 15)),
            _journal("j2", date(2024, 4, 10)),
            _journal("j3", date(2024, 5, 1)),
        ]
        lines = [
            _line("l1", "j1", debit="300"),
            _line("l2", "j2", credit="100"),
            _line("l3", "j3", debit="999"),
        ]

        ledger = build_account_ledger(
            account=CASH, journals=journals, lines=lines,
            date_range=DateRange(date(2024, 4, 1), date(2024, 4, 30)),
        )

        assert ledger.opening_balance == Decimal("1300.00")
        assert [r.line_id for r in ledger.rows] == ["l2"]
        assert ledger.rows[0].running_balance == Decimal("1200.00")
        assert ledger.closing_balance == Decimal("1200.00")

    def test_unknown_journal_dated_from_created_at(self):
        lines = [_line("l1", "missing", debit="10", created=datetime(2024, 4, 3, 10))]

        ledger = build_account_ledger(account=CASH, journals=[], lines=lines)

        assert ledger.rows[0].date == date(2024, 4, 3)
        assert ledger.rows[0].voucher_number == ""

    def test_voucher_and_particulars_from_journal(self):
        journals = [_journal("j1", date(2024, 4, 1), narration="Deposit", number="JV-7")]
        lines = [_line("l1", "j1", debit="10")]

        row = build_account_ledger(account=CASH, journals=journals, lines=lines).rows[0]

        assert row.voucher_number == "JV-7"
        assert row.particulars == "Deposit"

    def test_no_lines(self):
        ledger = build_account_ledger(account=CASH, journals=[], lines=[])

        assert ledger.rows == ()
        assert ledger.closing_balance == Decimal("1000.00")
