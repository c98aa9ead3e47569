"""ORM models for the ledger kernel."""

from ledger_kernel.models.account import Account, AccountType
from ledger_kernel.models.document import Invoice, PurchaseBill
from ledger_kernel.models.journal import Journal, JournalLine

__all__ = [
    "Account",
    "AccountType",
    "Invoice",
    "Journal",
    "JournalLine",
    "PurchaseBill",
]
