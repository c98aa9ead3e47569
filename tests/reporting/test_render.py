"""
Tests for report rendering.

Covers:
- Blank zero cells in trial balance and day book
- Two-decimal totals and the balance label
- Every aging bucket listed in the totals
- Generic dataclass rendering
"""

from datetime import date
from decimal import Decimal

from ledger_engines.aging import compute_aging_report
from ledger_engines.day_book import DayBookRow
from ledger_engines.trial_balance import compute_trial_balance
from ledger_kernel.domain.records import (
    AccountRecord,
    DocumentKind,
    JournalLineRecord,
    OutstandingDocument,
)
from ledger_reports.models import ReportMetadata, ReportType
from ledger_reports.render import (
    balance_label,
    render_aging,
    render_day_book,
    render_to_dict,
    render_trial_balance,
)

CASH = AccountRecord("a-cash", "1000", "Cash", "Cash")
SALES = AccountRecord("a-sales", "4000", "Sales", "Income")


def _tb(debit: str, credit: str):
    lines = [
        JournalLineRecord("l1", "j1", CASH.account_id, Decimal(debit), Decimal("0")),
        JournalLineRecord("l2", "j1", SALES.account_id, Decimal("0"), Decimal(credit)),
    ]
    return compute_trial_balance(accounts=[CASH, SALES], lines=lines)


class TestRenderTrialBalance:
    def test_zero_cells_blank(self):
        rendered = render_trial_balance(_tb("500", "500"))

        cash, sales = rendered["rows"]
        assert cash["debit"] == "500.00"
        assert cash["credit"] == ""
        assert sales["debit"] == ""
        assert sales["credit"] == "500.00"

    def test_totals_and_status(self):
        rendered = render_trial_balance(_tb("500", "500"))

        assert rendered["total_debit"] == "500.00"
        assert rendered["total_credit"] == "500.00"
        assert rendered["difference"] == "0.00"
        assert rendered["status"] == "Balanced"

    def test_unbalanced(self):
        rendered = render_trial_balance(_tb("500", "400.5"))

        assert rendered["difference"] == "99.50"
        assert rendered["status"] == "Not balanced"

    def test_untouched_account_listed_blank(self):
        rent = AccountRecord("a-rent", "5000", "Rent", "Expense")

        tb = compute_trial_balance(accounts=[CASH, rent], lines=[])
        rendered = render_trial_balance(tb)

        assert [r["account_name"] for r in rendered["rows"]] == ["Cash", "Rent"]
        assert all(r["debit"] == "" and r["credit"] == "" for r in rendered["rows"])
        assert rendered["total_debit"] == "0.00"


class TestBalanceLabel:
    def test_labels(self):
        assert balance_label(True) == "Balanced"
        assert balance_label(False) == "Not balanced"


class TestRenderDayBook:
    def test_row_shape(self):
        row = DayBookRow(
            date=date(2024, 4, 1),
            particulars="Rent paid",
            voucher_type="Journal",
            voucher_number="J2",
            account_name="Bank",
            debit=Decimal("0"),
            credit=Decimal("200"),
            balance=Decimal("-200"),
            journal_id="j2",
            line_id="l4",
        )

        (rendered,) = render_day_book([row])

        assert rendered == {
            "date": "2024-04-01",
            "particulars": "Rent paid",
            "voucher_type": "Journal",
            "voucher_number": "J2",
            "account": "Bank",
            "debit": "",
            "credit": "200.00",
            "balance": "-200.00",
        }


class TestRenderAging:
    def test_every_bucket_totalled(self):
        doc = OutstandingDocument(
            "i1", DocumentKind.RECEIVABLE, "Acme", "INV-1",
            date(2024, 1, 1), Decimal("1000"), Decimal("0"), "pending",
        )
        report = compute_aging_report([doc], as_of=date(2024, 2, 15))

        rendered = render_aging(report)

        assert rendered["as_of"] == "2024-02-15"
        assert rendered["rows"][0]["bucket"] == "31-60"
        assert rendered["rows"][0]["days_past_due"] == 45
        assert rendered["totals"] == {
            "0-30": "0.00",
            "31-60": "1000.00",
            "61-90": "0.00",
            ">90": "0.00",
        }
        assert rendered["total"] == "1000.00"


class TestRenderToDict:
    def test_metadata(self):
        metadata = ReportMetadata(
            report_type=ReportType.TRIAL_BALANCE,
            entity_name="Acme",
            currency="INR",
            user_id="user-1",
            generated_at="2024-02-15T00:00:00+00:00",
            period_start=date(2024, 4, 1),
            period_end=None,
            as_of_date=None,
        )

        rendered = render_to_dict(metadata)

        assert rendered["report_type"] == ReportType.TRIAL_BALANCE.value
        assert rendered["period_start"] == "2024-04-01"
        assert rendered["period_end"] is None

    def test_decimals_and_tuples(self):
        assert render_to_dict((Decimal("1.005"), Decimal("-0"))) == ["1.01", "0.00"]
