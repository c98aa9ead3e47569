"""
Report rendering -- engine results to plain, JSON-ready structures.

Amounts leave here as two-decimal strings.  Trial-balance and day-book
cells with no amount render as empty strings, as on the printed reports;
totals and balances always show two decimals.
"""

from __future__ import annotations

import dataclasses
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from ledger_engines.account_ledger import AccountLedger
from ledger_engines.aging import AgingReport
from ledger_engines.day_book import DayBookRow
from ledger_engines.profit_loss import ProfitAndLoss
from ledger_engines.trial_balance import TrialBalance
from ledger_kernel.domain.amounts import format_amount

BALANCED_LABEL = "Balanced"
NOT_BALANCED_LABEL = "Not balanced"


def render_to_dict(obj: object) -> Any:
    """
    Convert any report dataclass to plain Python for JSON serialization.

    Decimal -> two-decimal string, date -> ISO string, Enum -> value,
    dataclass -> dict, tuple -> list.
    """
    if obj is None:
        return None
    if isinstance(obj, Decimal):
        return format_amount(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [render_to_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): render_to_dict(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: render_to_dict(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)


def balance_label(is_balanced: bool) -> str:
    return BALANCED_LABEL if is_balanced else NOT_BALANCED_LABEL


def render_trial_balance(trial_balance: TrialBalance) -> dict[str, Any]:
    """
    Render a trial balance.

    Zero debit or credit cells are empty strings; the totals and the
    difference are always two-decimal strings.
    """
    return {
        "rows": [
            {
                "account_code": row.code,
                "account_name": row.name,
                "account_type": row.account_type,
                "debit": format_amount(row.debit_total, blank_zero=True),
                "credit": format_amount(row.credit_total, blank_zero=True),
            }
            for row in trial_balance.rows
        ],
        "total_debit": format_amount(trial_balance.total_debit),
        "total_credit": format_amount(trial_balance.total_credit),
        "difference": format_amount(trial_balance.difference),
        "status": balance_label(trial_balance.is_balanced),
    }


def render_day_book(rows: tuple[DayBookRow, ...] | list[DayBookRow]) -> list[dict[str, str]]:
    return [
        {
            "date": row.date.isoformat(),
            "particulars": row.particulars,
            "voucher_type": row.voucher_type,
            "voucher_number": row.voucher_number,
            "account": row.account_name,
            "debit": format_amount(row.debit, blank_zero=True),
            "credit": format_amount(row.credit, blank_zero=True),
            "balance": format_amount(row.balance),
        }
        for row in rows
    ]


def render_aging(report: AgingReport) -> dict[str, Any]:
    """Render aging rows plus per-bucket totals (every bucket listed)."""
    return {
        "as_of": report.as_of.isoformat(),
        "rows": [
            {
                "name": row.name,
                "document_number": row.document_number,
                "due_date": row.due_date.isoformat(),
                "amount": format_amount(row.amount),
                "days_past_due": row.days_past_due,
                "bucket": row.bucket.name,
            }
            for row in report.rows
        ],
        "totals": {
            name: format_amount(total)
            for name, total in report.total_by_bucket().items()
        },
        "total": format_amount(report.total_amount()),
    }


def render_account_ledger(ledger: AccountLedger) -> dict[str, Any]:
    return {
        "account_code": ledger.code,
        "account_name": ledger.name,
        "opening_balance": format_amount(ledger.opening_balance),
        "rows": [
            {
                "date": row.date.isoformat(),
                "particulars": row.particulars,
                "voucher_number": row.voucher_number,
                "debit": format_amount(row.debit, blank_zero=True),
                "credit": format_amount(row.credit, blank_zero=True),
                "balance": format_amount(row.running_balance),
            }
            for row in ledger.rows
        ],
        "closing_balance": format_amount(ledger.closing_balance),
    }


def render_profit_and_loss(result: ProfitAndLoss) -> dict[str, Any]:
    return {
        "months": [
            {
                "month": m.month,
                "income": format_amount(m.total_income),
                "expenses": format_amount(m.total_expenses),
                "net_profit": format_amount(m.net_profit),
            }
            for m in result.months
        ],
        "accounts": render_to_dict(result.accounts),
        "total_income": format_amount(result.total_income),
        "total_expenses": format_amount(result.total_expenses),
        "net_profit": format_amount(result.net_profit),
    }
