"""
Pytest fixtures for the ledger test suite.

Provides:
- Structured logging configured at DEBUG, and a ``captured_logs`` fixture
- An in-memory SQLite session with all ledger tables
- Factories that insert accounts, journals, lines and documents
- A deterministic clock
"""

import json
import logging
from datetime import date, datetime, timedelta
from decimal import Decimal
from io import StringIO

import pytest

from ledger_kernel.db.engine import (
    create_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from ledger_kernel.domain.clock import DeterministicClock
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from ledger_kernel.models import Account, Invoice, Journal, JournalLine, PurchaseBill

TEST_USER_ID = "user-1"
OTHER_USER_ID = "user-2"


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture ledger_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            compute_trial_balance(accounts=..., lines=...)
            logs = captured_logs()
            assert any(r["message"] == "trial_balance_computed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ledger_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session():
    """Fresh in-memory SQLite database per test."""
    init_engine_from_url("sqlite://")
    create_tables()
    s = get_session()
    yield s
    s.close()
    reset_engine()


@pytest.fixture
def clock():
    return DeterministicClock.on(date(2024, 2, 15))


@pytest.fixture
def create_account(session):
    """Insert an account and return it."""

    def _create(
        code: str,
        name: str,
        account_type: str,
        opening_balance: Decimal = Decimal("0"),
        user_id: str = TEST_USER_ID,
        is_active: bool = True,
    ) -> Account:
        account = Account(
            user_id=user_id,
            account_code=code,
            account_name=name,
            account_type=account_type,
            opening_balance=opening_balance,
            is_active=is_active,
        )
        session.add(account)
        session.flush()
        return account

    return _create


@pytest.fixture
def post_journal(session):
    """
    Insert a journal with its lines.

    ``lines`` is a list of ``(account, debit, credit)`` tuples; ``account``
    may be None for an unlinked line.  Line timestamps increase in list
    order so line ordering is deterministic.
    """
    counter = {"n": 0}

    def _post(
        journal_date: date,
        lines: list[tuple[Account | None, str | None, str | None]],
        narration: str | None = "Entry",
        status: str = "posted",
        journal_number: str | None = None,
        user_id: str = TEST_USER_ID,
    ) -> Journal:
        journal = Journal(
            user_id=user_id,
            journal_date=journal_date,
            narration=narration,
            status=status,
            journal_number=journal_number,
        )
        session.add(journal)
        session.flush()
        for account, debit, credit in lines:
            counter["n"] += 1
            session.add(
                JournalLine(
                    journal_id=journal.id,
                    account_id=account.id if account is not None else None,
                    debit=Decimal(debit) if debit is not None else None,
                    credit=Decimal(credit) if credit is not None else None,
                    created_at=datetime(2024, 1, 1) + timedelta(seconds=counter["n"]),
                )
            )
        session.flush()
        return journal

    return _post


@pytest.fixture
def create_invoice(session):
    def _create(
        invoice_number: str,
        client_name: str,
        due_date: date,
        total_amount: str,
        advance: str | None = None,
        status: str = "pending",
        user_id: str = TEST_USER_ID,
    ) -> Invoice:
        invoice = Invoice(
            user_id=user_id,
            invoice_number=invoice_number,
            client_name=client_name,
            due_date=due_date,
            total_amount=Decimal(total_amount),
            advance=Decimal(advance) if advance is not None else None,
            status=status,
        )
        session.add(invoice)
        session.flush()
        return invoice

    return _create


@pytest.fixture
def create_bill(session):
    def _create(
        bill_number: str,
        vendor_name: str,
        due_date: date,
        total_amount: str,
        paid_amount: str | None = None,
        status: str = "pending",
        user_id: str = TEST_USER_ID,
    ) -> PurchaseBill:
        bill = PurchaseBill(
            user_id=user_id,
            bill_number=bill_number,
            vendor_name=vendor_name,
            due_date=due_date,
            total_amount=Decimal(total_amount),
            paid_amount=Decimal(paid_amount) if paid_amount is not None else None,
            status=status,
        )
        session.add(bill)
        session.flush()
        return bill

    return _create


@pytest.fixture
def standard_ledger(create_account, post_journal):
    """
    The Cash / Sales / Rent / Bank example ledger.

    J1 2024-04-01: Cash Dr 500, Sales Cr 500
    J2 2024-04-01: Rent Dr 200, Bank Cr 200
    """
    cash = create_account("1000", "Cash", "Cash")
    bank = create_account("1010", "Bank", "Bank")
    sales = create_account("4000", "Sales", "Income")
    rent = create_account("5000", "Rent", "Expense")
    j1 = post_journal(
        date(2024, 4, 1),
        [(cash, "500", None), (sales, None, "500")],
        narration="Cash sale",
        journal_number="J1",
    )
    j2 = post_journal(
        date(2024, 4, 1),
        [(rent, "200", None), (bank, None, "200")],
        narration="Rent paid",
        journal_number="J2",
    )
    return {
        "cash": cash,
        "bank": bank,
        "sales": sales,
        "rent": rent,
        "j1": j1,
        "j2": j2,
    }
