"""
Amounts -- Decimal-only helpers for ledger currency values.

Responsibility:
    Single place where raw numeric input becomes a ``Decimal`` and where
    computed totals are rounded and formatted for output.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - No floats in computation. Floats arriving from a storage row are
      converted through ``str()`` so ``0.1`` stays ``0.1``.
    - Output precision is two places, ROUND_HALF_UP.
    - Balance checks use a fixed half-cent epsilon, never exact equality.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")

AMOUNT_PLACES = 2
_QUANTUM = Decimal("0.01")

# |total_debit - total_credit| must be strictly below this to count as balanced
BALANCE_TOLERANCE = Decimal("0.005")


def to_amount(value: Decimal | int | float | str | None) -> Decimal:
    """
    Convert a raw amount to Decimal.

    ``None`` and the empty string are treated as zero, matching how the
    storage layer represents an unused debit or credit column.

    Raises:
        ValueError: If the value is not numeric.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e


def round_amount(value: Decimal) -> Decimal:
    """Round to two decimal places (ROUND_HALF_UP)."""
    return value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal, blank_zero: bool = False) -> str:
    """
    Format an amount with exactly two decimals.

    With ``blank_zero`` an amount that is exactly zero renders as an empty
    string instead of ``"0.00"``.
    """
    rounded = round_amount(value)
    if blank_zero and rounded == ZERO:
        return ""
    # normalise negative zero
    if rounded == ZERO:
        rounded = abs(rounded)
    return f"{rounded:.{AMOUNT_PLACES}f}"


def is_within_tolerance(
    left: Decimal,
    right: Decimal,
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> bool:
    """True if ``|left - right| < tolerance``."""
    return abs(left - right) < tolerance
