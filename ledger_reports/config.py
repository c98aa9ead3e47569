"""
Reporting Configuration Schema.

Controls which journals and accounts feed each report, the day-book
defaults, the balance tolerance and the aging buckets.  Loaded from a
dict or a YAML file; every value is checked on construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Self

import yaml

from ledger_kernel.domain.amounts import BALANCE_TOLERANCE
from ledger_kernel.domain.records import CASH_BANK_TYPES, JournalStatus, normalize_type
from ledger_kernel.exceptions import InvalidConfigError
from ledger_kernel.logging_config import get_logger
from ledger_engines.aging import STANDARD_BUCKETS, AgeBucket, validate_buckets

logger = get_logger("reports.config")


@dataclass
class ReportingConfig:
    """
    Configuration schema for the report service.

    Statuses and account types are compared case-insensitively and are
    stored normalized.
    """

    # Entity name shown on reports
    entity_name: str = "Company"

    # ISO 4217 code shown next to amounts
    currency: str = "INR"

    # Account types whose lines appear in the day book
    day_book_account_types: tuple[str, ...] = tuple(sorted(CASH_BANK_TYPES))

    # Day-book particulars when neither narration is set
    default_particulars: str = "Entry"

    balance_tolerance: Decimal = BALANCE_TOLERANCE

    # Statuses never aged, for bills and invoices alike
    settled_statuses: tuple[str, ...] = ("paid",)

    # Invoice statuses that are aged; any other invoice is left out
    receivable_statuses: tuple[str, ...] = ("pending", "overdue")

    # Journal statuses never fetched for any report
    excluded_journal_statuses: tuple[str, ...] = (JournalStatus.VOID.value,)

    aging_buckets: tuple[AgeBucket, ...] = field(default=STANDARD_BUCKETS)

    def __post_init__(self):
        if not self.currency or len(self.currency) != 3:
            raise InvalidConfigError("currency", "must be a 3-letter ISO 4217 code")

        self.day_book_account_types = tuple(
            normalize_type(t) for t in self.day_book_account_types
        )
        if not self.day_book_account_types:
            raise InvalidConfigError("day_book_account_types", "must not be empty")

        try:
            self.balance_tolerance = Decimal(str(self.balance_tolerance))
        except InvalidOperation as e:
            raise InvalidConfigError("balance_tolerance", "not a number") from e
        if not self.balance_tolerance.is_finite() or not self.balance_tolerance > 0:
            raise InvalidConfigError("balance_tolerance", "must be a positive finite number")

        self.settled_statuses = tuple(s.strip().lower() for s in self.settled_statuses)
        self.receivable_statuses = tuple(s.strip().lower() for s in self.receivable_statuses)
        if not self.receivable_statuses:
            raise InvalidConfigError("receivable_statuses", "must not be empty")

        statuses = tuple(s.strip().lower() for s in self.excluded_journal_statuses)
        valid = {s.value for s in JournalStatus}
        unknown = sorted(set(statuses) - valid)
        if unknown:
            raise InvalidConfigError(
                "excluded_journal_statuses", f"unknown status {unknown[0]!r}"
            )
        self.excluded_journal_statuses = statuses

        self.aging_buckets = tuple(self.aging_buckets)
        try:
            validate_buckets(self.aging_buckets)
        except ValueError as e:
            raise InvalidConfigError("aging_buckets", str(e)) from e

    @property
    def included_journal_statuses(self) -> tuple[JournalStatus, ...]:
        return tuple(
            s for s in JournalStatus if s.value not in self.excluded_journal_statuses
        )

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """
        Create config from a dictionary.

        ``aging_buckets`` is a list of ``{name, min_days, max_days}``
        mappings; list values become tuples.

        Raises:
            InvalidConfigError: On an unknown key or an invalid value.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                raise InvalidConfigError(key, "unknown setting")
            if key == "aging_buckets":
                value = _parse_buckets(value)
            elif isinstance(value, list):
                value = tuple(value)
            values[key] = value

        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(values)},
        )
        try:
            return cls(**values)
        except (TypeError, ValueError, AttributeError) as e:
            raise InvalidConfigError(",".join(sorted(values)), str(e)) from e

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """
        Load config from a YAML file.

        The settings may sit at the top level or under a ``reporting`` key.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            InvalidConfigError: On an invalid setting.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise InvalidConfigError(str(path), "expected a mapping at the top level")
        if "reporting" in data and isinstance(data["reporting"], dict):
            data = data["reporting"]
        logger.info("reporting_config_loaded_from_yaml", extra={"path": str(path)})
        return cls.from_dict(data)


def _parse_buckets(raw: Any) -> tuple[AgeBucket, ...]:
    if not isinstance(raw, (list, tuple)):
        raise InvalidConfigError("aging_buckets", "expected a list of buckets")
    buckets = []
    for item in raw:
        if isinstance(item, AgeBucket):
            buckets.append(item)
            continue
        if not isinstance(item, dict) or "name" not in item or "min_days" not in item:
            raise InvalidConfigError("aging_buckets", "each bucket needs name and min_days")
        try:
            buckets.append(
                AgeBucket(
                    name=str(item["name"]),
                    min_days=int(item["min_days"]),
                    max_days=None if item.get("max_days") is None else int(item["max_days"]),
                )
            )
        except ValueError as e:
            raise InvalidConfigError("aging_buckets", str(e)) from e
    return tuple(buckets)
