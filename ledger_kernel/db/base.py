"""
Module: ledger_kernel.db.base
Responsibility: Declarative base classes for the SQLAlchemy ORM models that
    back the persistence collaborator (accounts, journals, journal lines,
    invoices, purchase bills).
Architecture position: Kernel > DB.  Lowest-level import target within the
    kernel.  MUST NOT import from models/, selectors/ or outer layers.

Invariants enforced:
    - String primary keys: rows are identified by uuid4 strings.
    - Decimal precision: Decimal maps to Numeric(18, 2).  NEVER use float for
      monetary amounts.
    - Ownership: every business row carries the owning user's id (OwnedBase).
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar
from uuid import uuid4

from sqlalchemy import DateTime, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    """Generate a primary key value."""
    return str(uuid4())


class Base(DeclarativeBase):
    """
    Declarative base for all ledger models.

    Guarantees:
        - id is a uuid4 string unless supplied by the caller.
        - Decimal maps to Numeric(18, 2).
        - datetime maps to DateTime(timezone=True).
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(18, 2),
        datetime: DateTime(timezone=True),
    }

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )


class OwnedBase(Base):
    """
    Abstract base for rows scoped to one user.

    Tenant isolation is a query concern: selectors always filter on
    ``user_id``.  Engines never see rows for more than one user.
    """

    __abstract__ = True

    user_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
