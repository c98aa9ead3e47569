"""
Module: ledger_kernel.models.journal
Responsibility: ORM persistence for journals and journal lines -- the raw
    material every ledger report is computed from.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - A journal is never mutated after posting; only its status may move to
      VOID (enforced by the posting workflow, which is not part of this
      package).
    - debit and credit are nullable: a line normally fills exactly one of
      them.  Nothing here rejects a line that fills both or neither.
    - account_id is nullable: unlinked lines exist in the wild and are
      ignored by aggregation.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, DateTime, ForeignKey, Index, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import Base, OwnedBase
from ledger_kernel.domain.records import JournalStatus

if TYPE_CHECKING:
    from ledger_kernel.models.account import Account


class Journal(OwnedBase):
    """Journal header: date, narration and lifecycle status."""

    __tablename__ = "journals"

    __table_args__ = (
        Index("idx_journal_user_date", "user_id", "journal_date"),
        Index("idx_journal_status", "status"),
    )

    journal_date: Mapped[date] = mapped_column(Date, nullable=False)

    narration: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    status: Mapped[str] = mapped_column(
        String(10),
        default=JournalStatus.POSTED.value,
        nullable=False,
    )

    journal_number: Mapped[str | None] = mapped_column(String(50), nullable=True)

    lines: Mapped[list["JournalLine"]] = relationship(
        back_populates="journal",
        order_by="JournalLine.created_at",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Journal {self.journal_number or self.id} {self.journal_date}>"


class JournalLine(Base):
    """
    One debit or credit posting within a journal.

    Lines are owned through their journal; they carry no user_id of their
    own.
    """

    __tablename__ = "journal_lines"

    __table_args__ = (
        Index("idx_journal_line_journal", "journal_id"),
        Index("idx_journal_line_account", "account_id"),
    )

    journal_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("journals.id"),
        nullable=False,
    )

    account_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("accounts.id"),
        nullable=True,
    )

    debit: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)

    credit: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)

    line_narration: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    journal: Mapped["Journal"] = relationship(back_populates="lines")

    account: Mapped[Optional["Account"]] = relationship(back_populates="journal_lines")
