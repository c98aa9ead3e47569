"""
Module: ledger_kernel.models.document
Responsibility: ORM persistence for outstanding documents -- sales invoices
    (receivables) and purchase bills (payables) -- as far as aging needs them.
Architecture position: Kernel > Models.  May import from db/base.py only.

The two tables name their "already settled" column differently (``advance``
on invoices, ``paid_amount`` on bills).  The names are kept as stored; the
selector maps both onto ``OutstandingDocument.settled_amount``.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import OwnedBase


class Invoice(OwnedBase):
    """Sales invoice (receivable)."""

    __tablename__ = "invoices"

    __table_args__ = (
        Index("idx_invoice_user_status", "user_id", "status"),
    )

    invoice_number: Mapped[str] = mapped_column(String(50), nullable=False)

    client_name: Mapped[str] = mapped_column(String(255), nullable=False)

    invoice_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    due_date: Mapped[date] = mapped_column(Date, nullable=False)

    total_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)

    advance: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)

    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)

    def __repr__(self) -> str:
        return f"<Invoice {self.invoice_number} {self.status}>"


class PurchaseBill(OwnedBase):
    """Purchase bill (payable)."""

    __tablename__ = "purchase_bills"

    __table_args__ = (
        Index("idx_purchase_bill_user_status", "user_id", "status"),
    )

    bill_number: Mapped[str] = mapped_column(String(50), nullable=False)

    vendor_name: Mapped[str] = mapped_column(String(255), nullable=False)

    bill_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    due_date: Mapped[date] = mapped_column(Date, nullable=False)

    total_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)

    paid_amount: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)

    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)

    def __repr__(self) -> str:
        return f"<PurchaseBill {self.bill_number} {self.status}>"
