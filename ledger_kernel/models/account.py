"""
Module: ledger_kernel.models.account
Responsibility: ORM persistence for the chart of accounts -- the target of
    every journal line.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - (user_id, account_code) is unique: one chart per user.
    - account_type is free text; comparisons elsewhere are case-insensitive.
      Created by chart-of-accounts setup and not changed once referenced
      by a posted line (enforced by the entry workflow, not this model).
"""

from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Index, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import OwnedBase

if TYPE_CHECKING:
    from ledger_kernel.models.journal import JournalLine


class AccountType(str, Enum):
    """Account types used by the chart-of-accounts setup."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSE = "Expense"
    # Asset subtypes that feed the day book
    CASH = "Cash"
    BANK = "Bank"


class Account(OwnedBase):
    """
    Chart of accounts entry.

    Contract:
        account_code is unique per user and is the trial balance sort key.
    """

    __tablename__ = "accounts"

    __table_args__ = (
        UniqueConstraint("user_id", "account_code", name="uq_account_user_code"),
        Index("idx_account_type", "account_type"),
    )

    account_code: Mapped[str] = mapped_column(String(50), nullable=False)

    account_name: Mapped[str] = mapped_column(String(255), nullable=False)

    account_type: Mapped[str] = mapped_column(String(30), nullable=False)

    opening_balance: Mapped[Decimal] = mapped_column(
        Numeric(18, 2),
        default=Decimal("0"),
        nullable=False,
    )

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    journal_lines: Mapped[list["JournalLine"]] = relationship(
        back_populates="account",
        lazy="dynamic",
    )

    def __repr__(self) -> str:
        return f"<Account {self.account_code}: {self.account_name}>"
