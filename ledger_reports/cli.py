"""
Command-line report viewer.

Connects to an existing ledger database and prints one report as JSON.

Usage:
    python -m ledger_reports --user U1 trial-balance
    python -m ledger_reports --user U1 day-book --start 2024-04-01 --end 2024-04-30
    python -m ledger_reports --user U1 aging receivables
    python -m ledger_reports --user U1 --config reporting.yaml ledger ACCOUNT_ID
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import date
from typing import Any, Sequence

import yaml

from ledger_kernel.db.engine import get_session, init_engine_from_url
from ledger_kernel.domain.clock import SystemClock
from ledger_kernel.domain.records import DateRange
from ledger_kernel.exceptions import LedgerError
from ledger_kernel.logging_config import configure_logging
from ledger_reports.config import ReportingConfig
from ledger_reports.render import (
    render_account_ledger,
    render_aging,
    render_day_book,
    render_profit_and_loss,
    render_to_dict,
    render_trial_balance,
)
from ledger_reports.service import ReportingService

DB_URL = os.environ.get("LEDGER_DATABASE_URL", "sqlite:///ledger.db")


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledger_reports",
        description="Print ledger reports as JSON.",
    )
    parser.add_argument("--database-url", default=DB_URL, help="SQLAlchemy database URL")
    parser.add_argument("--user", required=True, help="Owning user id")
    parser.add_argument("--config", default=None, help="Reporting config YAML file")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Structured log level (logs go to stderr)",
    )

    sub = parser.add_subparsers(dest="report", required=True)

    sub.add_parser("trial-balance", help="Trial balance over the whole ledger")

    day_book = sub.add_parser("day-book", help="Cash and bank day book")
    day_book.add_argument("--start", type=_iso_date, default=None)
    day_book.add_argument("--end", type=_iso_date, default=None)

    aging = sub.add_parser("aging", help="Receivable or payable aging")
    aging.add_argument("kind", choices=["receivables", "payables"])
    aging.add_argument("--as-of", type=_iso_date, default=None)

    ledger = sub.add_parser("ledger", help="Running-balance ledger of one account")
    ledger.add_argument("account_id")
    ledger.add_argument("--start", type=_iso_date, default=None)
    ledger.add_argument("--end", type=_iso_date, default=None)

    pnl = sub.add_parser("profit-loss", help="Income and expense summary")
    pnl.add_argument("--start", type=_iso_date, default=None)
    pnl.add_argument("--end", type=_iso_date, default=None)

    return parser


def run_report(service: ReportingService, args: argparse.Namespace) -> dict[str, Any]:
    """Generate the report named by ``args.report`` and render it."""
    user_id = args.user

    if args.report == "trial-balance":
        report = service.trial_balance(user_id)
        body: Any = render_trial_balance(report.trial_balance)
    elif args.report == "day-book":
        report = service.day_book(user_id, DateRange(args.start, args.end))
        body = render_day_book(report.rows)
    elif args.report == "aging":
        report = service.aging(user_id, args.kind, as_of=args.as_of)
        body = render_aging(report.aging)
    elif args.report == "ledger":
        report = service.account_ledger(
            user_id, args.account_id, DateRange(args.start, args.end),
        )
        body = render_account_ledger(report.ledger)
    elif args.report == "profit-loss":
        report = service.profit_and_loss(user_id, DateRange(args.start, args.end))
        body = render_profit_and_loss(report.profit_and_loss)
    else:
        raise ValueError(f"Unknown report: {args.report}")

    return {"metadata": render_to_dict(report.metadata), "report": body}


def main(argv: Sequence[str] | None = None, stdout=None) -> int:
    parser = build_parser()
    out = stdout or sys.stdout
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return int(e.code or 0)

    configure_logging(level=getattr(logging, args.log_level))

    try:
        config = (
            ReportingConfig.from_yaml(args.config)
            if args.config else ReportingConfig.with_defaults()
        )
    except (LedgerError, OSError, yaml.YAMLError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    try:
        init_engine_from_url(args.database_url)
    except Exception as e:
        print(f"ERROR: Could not connect: {e}", file=sys.stderr)
        return 1

    session = get_session()
    try:
        service = ReportingService(session=session, clock=SystemClock(), config=config)
        try:
            output = run_report(service, args)
        except (LedgerError, ValueError) as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 2
    finally:
        session.close()

    json.dump(output, out, indent=2)
    out.write("\n")
    return 0
