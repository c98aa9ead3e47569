"""
Module: ledger_kernel.selectors.ledger_selector
Responsibility: Read-only queries for the ledger engines -- one user's
    journals (optionally within a date range and status set), the lines of
    a set of journals, and the user's chart of accounts.
Architecture position: Kernel > Selectors.  May import from models/,
    domain/records and selectors/base.py.

Invariants enforced:
    - Tenant scoping: journals and accounts are always filtered by user_id.
      Lines are reached only through journal ids the caller already holds.
    - No stored balances: this selector returns raw rows; every total is
      computed by the engines at request time.
    - Ordering is deterministic: journals by (journal_date, journal_number,
      id), lines by (created_at, id), accounts by (account_code, id).

Failure modes:
    - Returns empty lists when the user has no data.
    - RecordParseError if a stored row violates the record contract.
"""

from collections.abc import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.records import (
    AccountRecord,
    DateRange,
    JournalLineRecord,
    JournalRecord,
    JournalStatus,
    parse_account,
    parse_journal,
    parse_journal_line,
)
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.account import Account
from ledger_kernel.models.journal import Journal, JournalLine
from ledger_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.ledger")

# Keep IN (...) lists well under driver parameter limits
_ID_CHUNK = 500


def account_to_record(account: Account) -> AccountRecord:
    return parse_account({
        "id": account.id,
        "account_code": account.account_code,
        "account_name": account.account_name,
        "account_type": account.account_type,
        "opening_balance": account.opening_balance,
    })


def journal_to_record(journal: Journal) -> JournalRecord:
    return parse_journal({
        "id": journal.id,
        "journal_date": journal.journal_date,
        "narration": journal.narration,
        "status": journal.status,
        "user_id": journal.user_id,
        "journal_number": journal.journal_number,
    })


def line_to_record(line: JournalLine) -> JournalLineRecord:
    return parse_journal_line({
        "id": line.id,
        "journal_id": line.journal_id,
        "account_id": line.account_id,
        "debit": line.debit,
        "credit": line.credit,
        "line_narration": line.line_narration,
        "created_at": line.created_at,
    })


class LedgerSelector(BaseSelector[Journal]):
    """
    Selector for the raw ledger inputs.

    Contract:
        Every method is read-only and returns frozen records.

    Non-goals:
        - No aggregation happens here; see ledger_engines.
        - Org/branch permissioning is the caller's concern.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def fetch_journals(
        self,
        user_id: str,
        date_range: DateRange | None = None,
        statuses: Iterable[JournalStatus] | None = None,
    ) -> list[JournalRecord]:
        """
        Fetch a user's journals.

        Args:
            user_id: Owning user.
            date_range: Optional inclusive journal_date filter.
            statuses: Optional status whitelist (all statuses when None).

        Returns:
            Journals ordered by (journal_date, journal_number, id).
        """
        query = select(Journal).where(Journal.user_id == user_id)

        if date_range is not None:
            if date_range.start is not None:
                query = query.where(Journal.journal_date >= date_range.start)
            if date_range.end is not None:
                query = query.where(Journal.journal_date <= date_range.end)

        if statuses is not None:
            query = query.where(
                Journal.status.in_([JournalStatus(s).value for s in statuses])
            )

        query = query.order_by(Journal.journal_date, Journal.journal_number, Journal.id)
        journals = [journal_to_record(j) for j in self.session.scalars(query)]

        logger.debug(
            "journals_fetched",
            extra={
                "user_id": user_id,
                "journal_count": len(journals),
                "start": date_range.start if date_range else None,
                "end": date_range.end if date_range else None,
            },
        )
        return journals

    def fetch_journal_lines(self, journal_ids: Sequence[str]) -> list[JournalLineRecord]:
        """
        Fetch the lines of the given journals.

        Returns:
            Lines ordered by (created_at, id).  Empty when no ids are given.
        """
        ids = list(dict.fromkeys(journal_ids))
        if not ids:
            return []

        lines: list[JournalLine] = []
        for i in range(0, len(ids), _ID_CHUNK):
            chunk = ids[i:i + _ID_CHUNK]
            query = select(JournalLine).where(JournalLine.journal_id.in_(chunk))
            lines.extend(self.session.scalars(query))

        lines.sort(key=lambda l: (l.created_at, l.id))
        records = [line_to_record(l) for l in lines]

        logger.debug(
            "journal_lines_fetched",
            extra={"journal_count": len(ids), "line_count": len(records)},
        )
        return records

    def fetch_accounts(self, user_id: str, include_inactive: bool = True) -> list[AccountRecord]:
        """
        Fetch a user's chart of accounts ordered by account code.
        """
        query = select(Account).where(Account.user_id == user_id)
        if not include_inactive:
            query = query.where(Account.is_active.is_(True))
        query = query.order_by(Account.account_code, Account.id)

        accounts = [account_to_record(a) for a in self.session.scalars(query)]

        logger.debug(
            "accounts_fetched",
            extra={"user_id": user_id, "account_count": len(accounts)},
        )
        return accounts
