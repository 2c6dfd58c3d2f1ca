"""Display formatting for token amounts — pure functions, no I/O."""
from __future__ import annotations

import re
from dataclasses import fields
from typing import Mapping

from .amounts import checked
from .models import BalanceBreakdown

NEAR_NOMINATION_EXP = 24

_DISPLAY_AMOUNT_RE = re.compile(r"^(\d*)(?:\.(\d*))?$")


def format_amount(
    amount: int, decimals: int, nomination_exp: int = NEAR_NOMINATION_EXP
) -> str:
    """Render an amount in display units with at most ``decimals`` digits.

    Rounds half-up at the last kept digit, groups the integer part with
    commas and drops trailing fractional zeros.

    Examples:
        format_amount(2_500_000_000_000_000_000_000_000, 2) → "2.5"
        format_amount(1_234_567 * 10**24, 5)                → "1,234,567"
    """
    checked(amount, "format_amount")
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    if decimals < nomination_exp:
        amount += 5 * 10 ** (nomination_exp - decimals - 1)

    if nomination_exp == 0:
        return f"{amount:,}"

    digits = str(amount).rjust(nomination_exp + 1, "0")
    whole = int(digits[:-nomination_exp])
    fraction = digits[-nomination_exp:][:decimals].rstrip("0")
    return f"{whole:,}.{fraction}" if fraction else f"{whole:,}"


def parse_amount(text: str, nomination_exp: int = NEAR_NOMINATION_EXP) -> int:
    """Parse a display-unit string such as ``"3.5"`` into the smallest unit.

    Examples:
        parse_amount("3.5")  → 3_500_000_000_000_000_000_000_000
        parse_amount("1,000") → 1_000 * 10**24
    """
    cleaned = text.strip().replace(",", "")
    match = _DISPLAY_AMOUNT_RE.match(cleaned)
    if not match or cleaned in ("", "."):
        raise ValueError(f"Not a display amount: {text!r}")

    whole, fraction = match.group(1), match.group(2) or ""
    if len(fraction) > nomination_exp:
        raise ValueError(
            f"Cannot parse {text!r}: more than {nomination_exp} fractional digits"
        )
    value = int(whole or "0") * 10**nomination_exp + int(
        fraction.ljust(nomination_exp, "0") or "0"
    )
    return checked(value, "parse_amount")


def format_breakdown(
    breakdown: BalanceBreakdown,
    symbol: str = "NEAR",
    nomination_exp: int = NEAR_NOMINATION_EXP,
    default_decimals: int = 2,
    field_decimals: Mapping[str, int] | None = None,
) -> dict[str, str]:
    """Build labelled display strings (``"2.5 NEAR"``) for every breakdown field."""
    field_decimals = field_decimals or {}
    labels: dict[str, str] = {}
    for f in fields(breakdown):
        decimals = field_decimals.get(f.name, default_decimals)
        amount = format_amount(getattr(breakdown, f.name), decimals, nomination_exp)
        labels[f.name] = f"{amount} {symbol}"
    return labels
