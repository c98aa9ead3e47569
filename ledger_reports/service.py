"""
Report Service (``ledger_reports.service``).

Responsibility
--------------
Orchestrates report generation -- trial balance, day book, account
ledger, profit & loss, receivable and payable aging -- by bridging the
database selectors (``LedgerSelector``, ``DocumentSelector``) to the pure
engines in ``ledger_engines``.  This is a **read-only** service.

Architecture position
---------------------
**Reports layer** -- thin glue.  Constructor: ``session`` + ``clock`` +
``config`` + optional ``cache``.

Invariants enforced
-------------------
* Read-only -- no mutations to journals, lines or documents.
* Tenant scoping -- every query is filtered by the caller's ``user_id``.
* Journals whose status is in ``config.excluded_journal_statuses`` never
  reach an engine.
* "Today" comes from the injected clock; engines receive it explicitly.

Failure modes
-------------
* Selector query failure  -> exception propagates.
* Unknown account for ``account_ledger``  -> ``AccountNotFoundError``.
* Bad aging kind  -> ``ValueError``.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from ledger_engines.account_ledger import build_account_ledger
from ledger_engines.aging import compute_aging_report
from ledger_engines.day_book import build_day_book
from ledger_engines.profit_loss import compute_profit_and_loss
from ledger_engines.trial_balance import compute_trial_balance
from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.records import (
    AccountRecord,
    DateRange,
    DocumentKind,
    JournalLineRecord,
    JournalRecord,
)
from ledger_kernel.exceptions import AccountNotFoundError
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.selectors.document_selector import DocumentSelector
from ledger_kernel.selectors.ledger_selector import LedgerSelector
from ledger_reports.cache import ReportCache
from ledger_reports.config import ReportingConfig
from ledger_reports.models import (
    AccountLedgerReport,
    AgingSummaryReport,
    DayBookReport,
    ProfitAndLossReport,
    ReportMetadata,
    ReportType,
    TrialBalanceReport,
)

logger = get_logger("reports.service")

_KIND_ALIASES = {
    "receivable": DocumentKind.RECEIVABLE,
    "receivables": DocumentKind.RECEIVABLE,
    "payable": DocumentKind.PAYABLE,
    "payables": DocumentKind.PAYABLE,
}


def parse_document_kind(kind: DocumentKind | str) -> DocumentKind:
    """Accept a ``DocumentKind`` or its (plural) name."""
    if isinstance(kind, DocumentKind):
        return kind
    try:
        return _KIND_ALIASES[kind.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown document kind: {kind!r}") from None


class ReportingService:
    """
    Ledger report generation service.

    Contract
    --------
    * Every public method returns a typed report DTO.
    * All methods are read-only.

    Guarantees
    ----------
    * No ledger arithmetic lives in this class; it loads records and
      delegates to the engines.
    * Clock is injectable for deterministic testing.
    * With a ``ReportCache`` a repeated request returns the stored report
      until ``cache.invalidate(user_id)`` is called.

    Non-goals
    ---------
    * Does NOT post or edit journals.
    * Does NOT check org/branch permissions.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
        cache: ReportCache | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._cache = cache
        self._ledger = LedgerSelector(session)
        self._documents = DocumentSelector(session)

        logger.info(
            "reporting_service_initialized",
            extra={
                "entity_name": self._config.entity_name,
                "currency": self._config.currency,
                "cache_enabled": cache is not None,
            },
        )

    @property
    def config(self) -> ReportingConfig:
        return self._config

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _load_ledger(
        self,
        user_id: str,
        date_range: DateRange | None = None,
    ) -> tuple[list[JournalRecord], list[JournalLineRecord], list[AccountRecord]]:
        journals = self._ledger.fetch_journals(
            user_id,
            date_range=date_range,
            statuses=self._config.included_journal_statuses,
        )
        lines = self._ledger.fetch_journal_lines([j.journal_id for j in journals])
        accounts = self._ledger.fetch_accounts(user_id)
        return journals, lines, accounts

    def _build_metadata(
        self,
        report_type: ReportType,
        user_id: str,
        date_range: DateRange | None = None,
        as_of_date: date | None = None,
    ) -> ReportMetadata:
        """Build report metadata with injected clock timestamp."""
        return ReportMetadata(
            report_type=report_type,
            entity_name=self._config.entity_name,
            currency=self._config.currency,
            user_id=user_id,
            generated_at=self._clock.now().isoformat(),
            period_start=date_range.start if date_range else None,
            period_end=date_range.end if date_range else None,
            as_of_date=as_of_date,
        )

    def _cached(self, report: ReportType, user_id: str, params, compute):
        if self._cache is None:
            return compute()
        return self._cache.get_or_compute(report.value, user_id, params, compute)

    # =========================================================================
    # Public API
    # =========================================================================

    def trial_balance(self, user_id: str) -> TrialBalanceReport:
        """
        Generate the trial balance over the user's whole ledger.

        Returns:
            TrialBalanceReport listing every account in code order.
        """
        def compute() -> TrialBalanceReport:
            _, lines, accounts = self._load_ledger(user_id)
            result = compute_trial_balance(
                accounts=accounts,
                lines=lines,
                tolerance=self._config.balance_tolerance,
            )
            return TrialBalanceReport(
                metadata=self._build_metadata(ReportType.TRIAL_BALANCE, user_id),
                trial_balance=result,
            )

        with LogContext.bind(user_id=user_id, report=ReportType.TRIAL_BALANCE.value):
            report = self._cached(ReportType.TRIAL_BALANCE, user_id, None, compute)
            logger.info(
                "trial_balance_generated",
                extra={
                    "account_count": len(report.trial_balance.rows),
                    "total_debit": str(report.trial_balance.total_debit),
                    "total_credit": str(report.trial_balance.total_credit),
                    "is_balanced": report.trial_balance.is_balanced,
                },
            )
        return report

    def day_book(self, user_id: str, date_range: DateRange | None = None) -> DayBookReport:
        """
        Generate the cash and bank day book for a period.

        Args:
            user_id: Owning user.
            date_range: Inclusive period; the whole ledger when None.
        """
        def compute() -> DayBookReport:
            journals, lines, accounts = self._load_ledger(user_id, date_range)
            rows = build_day_book(
                journals=journals,
                lines=lines,
                accounts=accounts,
                date_range=date_range,
                account_types=self._config.day_book_account_types,
                default_particulars=self._config.default_particulars,
            )
            return DayBookReport(
                metadata=self._build_metadata(ReportType.DAY_BOOK, user_id, date_range),
                rows=rows,
            )

        with LogContext.bind(user_id=user_id, report=ReportType.DAY_BOOK.value):
            report = self._cached(ReportType.DAY_BOOK, user_id, date_range, compute)
            logger.info("day_book_generated", extra={"row_count": len(report.rows)})
        return report

    def account_ledger(
        self,
        user_id: str,
        account_id: str,
        date_range: DateRange | None = None,
    ) -> AccountLedgerReport:
        """
        Generate one account's running-balance ledger.

        Lines before ``date_range.start`` are brought forward into the
        opening balance, so the whole ledger is loaded.

        Raises:
            AccountNotFoundError: If the account is not in the user's chart.
        """
        def compute() -> AccountLedgerReport:
            journals, lines, accounts = self._load_ledger(user_id)
            account = next((a for a in accounts if a.account_id == account_id), None)
            if account is None:
                raise AccountNotFoundError(account_id)
            ledger = build_account_ledger(
                account=account,
                journals=journals,
                lines=lines,
                date_range=date_range,
            )
            return AccountLedgerReport(
                metadata=self._build_metadata(ReportType.ACCOUNT_LEDGER, user_id, date_range),
                ledger=ledger,
            )

        with LogContext.bind(user_id=user_id, report=ReportType.ACCOUNT_LEDGER.value):
            report = self._cached(
                ReportType.ACCOUNT_LEDGER, user_id, (account_id, date_range), compute,
            )
            logger.info(
                "account_ledger_generated",
                extra={
                    "account_id": account_id,
                    "row_count": len(report.ledger.rows),
                },
            )
        return report

    def profit_and_loss(
        self,
        user_id: str,
        date_range: DateRange | None = None,
    ) -> ProfitAndLossReport:
        """Generate the income and expense summary for a period."""
        def compute() -> ProfitAndLossReport:
            journals, lines, accounts = self._load_ledger(user_id, date_range)
            result = compute_profit_and_loss(
                journals=journals,
                lines=lines,
                accounts=accounts,
                date_range=date_range,
            )
            return ProfitAndLossReport(
                metadata=self._build_metadata(ReportType.PROFIT_AND_LOSS, user_id, date_range),
                profit_and_loss=result,
            )

        with LogContext.bind(user_id=user_id, report=ReportType.PROFIT_AND_LOSS.value):
            report = self._cached(ReportType.PROFIT_AND_LOSS, user_id, date_range, compute)
            logger.info(
                "profit_and_loss_generated",
                extra={"net_profit": str(report.profit_and_loss.net_profit)},
            )
        return report

    def aging(
        self,
        user_id: str,
        kind: DocumentKind | str,
        as_of: date | None = None,
    ) -> AgingSummaryReport:
        """
        Generate a receivable or payable aging report.

        Args:
            user_id: Owning user.
            kind: ``DocumentKind`` or "receivables" / "payables".
            as_of: Reference date; today per the injected clock when None.
        """
        document_kind = parse_document_kind(kind)
        as_of_date = as_of or self._clock.today()

        def compute() -> AgingSummaryReport:
            if document_kind is DocumentKind.RECEIVABLE:
                documents = self._documents.fetch_receivables(user_id)
            else:
                documents = self._documents.fetch_payables(user_id)
            aging = compute_aging_report(
                documents=documents,
                as_of=as_of_date,
                buckets=self._config.aging_buckets,
                settled_statuses=self._config.settled_statuses,
                aged_statuses=(
                    self._config.receivable_statuses
                    if document_kind is DocumentKind.RECEIVABLE else None
                ),
            )
            return AgingSummaryReport(
                metadata=self._build_metadata(ReportType.AGING, user_id, as_of_date=as_of_date),
                kind=document_kind,
                aging=aging,
            )

        with LogContext.bind(user_id=user_id, report=ReportType.AGING.value):
            report = self._cached(
                ReportType.AGING, user_id, (document_kind, as_of_date), compute,
            )
            logger.info(
                "aging_generated",
                extra={
                    "kind": document_kind.value,
                    "row_count": report.aging.row_count,
                    "total_amount": str(report.aging.total_amount()),
                },
            )
        return report
