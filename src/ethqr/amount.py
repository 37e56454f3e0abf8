"""Exact conversion between decimal ETH strings and integer wei.

Only integer arithmetic is used. Floats cannot represent most 18-digit
fractions, so a float never touches the amount.
"""

from __future__ import annotations

import re

from . import ValidationError
from .config import ETH_DECIMALS, MAX_WEI

WEI_PER_ETH = 10**ETH_DECIMALS
MAX_WHOLE_DIGITS = len(str(MAX_WEI // WEI_PER_ETH))

_DECIMAL_RE = re.compile(r"[0-9]*(?:\.[0-9]*)?")


def to_wei(raw: str) -> str:
    """Convert a decimal ETH amount to a wei string.

    Raises ValidationError for empty, malformed, over-precise, oversized
    or non-positive input. Checks run in that order. The ceiling is the
    uint256 range a transaction value can carry.
    """
    normalized = raw.strip()
    if not normalized:
        raise ValidationError("Amount required.", field="amount")

    if normalized == "." or not _DECIMAL_RE.fullmatch(normalized):
        raise ValidationError("Amount is not a valid number.", field="amount")

    whole, _, fraction = normalized.partition(".")
    if len(fraction) > ETH_DECIMALS:
        raise ValidationError(
            f"Amount has too many decimal places (max {ETH_DECIMALS}).",
            field="amount",
        )

    whole = whole.lstrip("0") or "0"
    # Checked on the digit count first so int() never sees an unbounded string
    if len(whole) > MAX_WHOLE_DIGITS:
        raise ValidationError("Amount is too large.", field="amount")
    fraction = fraction.ljust(ETH_DECIMALS, "0")

    total = int(whole) * WEI_PER_ETH + int(fraction)
    if total > MAX_WEI:
        raise ValidationError("Amount is too large.", field="amount")
    if total <= 0:
        raise ValidationError("Amount must be greater than zero.", field="amount")
    return str(total)


def format_eth(wei: int | str) -> str:
    """Render a wei amount as a canonical ETH decimal string."""
    value = int(wei)
    if value < 0:
        raise ValueError("wei amount must be non-negative")
    whole, fraction = divmod(value, WEI_PER_ETH)
    if not fraction:
        return str(whole)
    digits = str(fraction).rjust(ETH_DECIMALS, "0").rstrip("0")
    return f"{whole}.{digits}"
