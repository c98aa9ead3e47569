"""
Ledger reports: configuration, the read-only report service, rendering
and the command-line viewer.

Usage:
    from ledger_reports import ReportingService, ReportingConfig

    service = ReportingService(session, config=ReportingConfig.with_defaults())
    report = service.trial_balance(user_id)
"""

from ledger_reports.cache import ReportCache
from ledger_reports.config import ReportingConfig
from ledger_reports.service import ReportingService

__all__ = [
    "ReportCache",
    "ReportingConfig",
    "ReportingService",
]
