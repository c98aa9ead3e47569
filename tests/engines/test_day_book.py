"""Tests for the day-book builder."""

from datetime import date
from decimal import Decimal

from ledger_engines.day_book import build_day_book
from ledger_kernel.domain.records import (
    AccountRecord,
    DateRange,
    JournalLineRecord,
    JournalRecord,
    JournalStatus,
)

ACCOUNTS = (
    AccountRecord("cash", "1000", "Cash", "Cash"),
    AccountRecord("bank", "1010", "Bank", "bank"),
    AccountRecord("sales", "4000", "Sales", "Income"),
    AccountRecord("rent", "5000", "Rent", "Expense"),
)


def _journal(journal_id, day, narration=None, number=None):
    return JournalRecord(
        journal_id=journal_id,
        journal_date=day,
        narration=narration,
        status=JournalStatus.POSTED,
        user_id="u1",
        journal_number=number,
    )


def _line(line_id, journal_id, account_id, debit="0", credit="0", narration=None):
    return JournalLineRecord(
        line_id=line_id,
        journal_id=journal_id,
        account_id=account_id,
        debit=Decimal(debit),
        credit=Decimal(credit),
        line_narration=narration,
    )


class TestDayBookRows:
    """Tests for row content."""

    def test_scenario_cash_and_bank_only(self):
        """Cash 500 in, Bank 200 out on the same date: balances 500 then 300."""
        journals = [
            _journal("j1", date(2024, 4, 1), "Sale", "J1"),
            _journal("j2", date(2024, 4, 1), "Rent", "J2"),
        ]
        lines = [
            _line("l1", "j1", "cash", debit="500"),
            _line("l2", "j1", "sales", credit="500"),
            _line("l3", "j2", "rent", debit="200"),
            _line("l4", "j2", "bank", credit="200"),
        ]

        rows = build_day_book(journals=journals, lines=lines, accounts=ACCOUNTS)

        assert [r.account_name for r in rows] == ["Cash", "Bank"]
        assert [r.balance for r in rows] == [Decimal("500.00"), Decimal("300.00")]
        assert rows[0].particulars == "Sale"
        assert rows[1].voucher_number == "J2"
        assert all(r.voucher_type == "Journal" for r in rows)

    def test_particulars_fallback(self):
        journals = [
            _journal("j1", date(2024, 4, 1), None),
            _journal("j2", date(2024, 4, 1), None),
        ]
        lines = [
            _line("l1", "j1", "cash", debit="1", narration="Petty cash"),
            _line("l2", "j2", "cash", debit="1"),
        ]

        rows = build_day_book(journals=journals, lines=lines, accounts=ACCOUNTS)

        assert [r.particulars for r in rows] == ["Petty cash", "Entry"]

    def test_custom_default_particulars(self):
        journals = [_journal("j1", date(2024, 4, 1))]
        lines = [_line("l1", "j1", "cash", debit="1")]

        rows = build_day_book(
            journals=journals, lines=lines, accounts=ACCOUNTS,
            default_particulars="Journal entry",
        )

        assert rows[0].particulars == "Journal entry"

    def test_voucher_number_defaults_to_journal_id(self):
        journals = [_journal("abc", date(2024, 4, 1), "x")]
        lines = [_line("l1", "abc", "cash", debit="1")]

        rows = build_day_book(journals=journals, lines=lines, accounts=ACCOUNTS)

        assert rows[0].voucher_number == "JNL-abc"

    def test_empty_input(self):
        assert build_day_book(journals=[], lines=[], accounts=ACCOUNTS) == ()


class TestRunningBalance:
    """The running balance restarts every day."""

    def test_balance_resets_on_new_date(self):
        journals = [
            _journal("j1", date(2024, 4, 1), "Day one"),
            _journal("j2", date(2024, 4, 2), "Day two"),
        ]
        lines = [
            _line("l1", "j1", "cash", debit="100"),
            _line("l2", "j2", "cash", debit="50", credit="20"),
        ]

        rows = build_day_book(journals=journals, lines=lines, accounts=ACCOUNTS)

        assert rows[1].balance == Decimal("30.00")

    def test_rows_sorted_by_date_stably(self):
        journals = [
            _journal("late", date(2024, 4, 3), "late"),
            _journal("early-a", date(2024, 4, 1), "a"),
            _journal("early-b", date(2024, 4, 1), "b"),
        ]
        lines = [
            _line("l1", "late", "cash", debit="1"),
            _line("l2", "early-a", "cash", debit="2"),
            _line("l3", "early-b", "bank", credit="5"),
        ]

        rows = build_day_book(journals=journals, lines=lines, accounts=ACCOUNTS)

        assert [r.line_id for r in rows] == ["l2", "l3", "l1"]
        assert [r.balance for r in rows] == [
            Decimal("2.00"), Decimal("-3.00"), Decimal("1.00"),
        ]

    def test_date_range_applied(self):
        journals = [
            _journal("j1", date(2024, 3, 31), "before"),
            _journal("j2", date(2024, 4, 1), "inside"),
        ]
        lines = [
            _line("l1", "j1", "cash", debit="9"),
            _line("l2", "j2", "cash", debit="4"),
        ]

        rows = build_day_book(
            journals=journals, lines=lines, accounts=ACCOUNTS,
            date_range=DateRange(start=date(2024, 4, 1)),
        )

        assert [r.particulars for r in rows] == ["inside"]

    def test_lines_of_unknown_journal_dropped(self):
        lines = [_line("l1", "missing", "cash", debit="9")]

        rows = build_day_book(journals=[], lines=lines, accounts=ACCOUNTS)

        assert rows == ()
