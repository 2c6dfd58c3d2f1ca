"""Decoding of raw lockup account state — pure functions, no I/O.

The chain-query side hands over JSON-like mappings in which every amount and
timestamp is a decimal string, so that no precision is lost on the way.
"""
from __future__ import annotations

import re
from typing import Any, Mapping

from .amounts import MAX_AMOUNT, checked
from .errors import ArithmeticOverflow, SnapshotDecodeError
from .models import (
    BalanceBreakdown,
    ContractVersion,
    LockupAccountSnapshot,
    LockupGrant,
    VestingSchedule,
)

_UINT_RE = re.compile(r"^[0-9]+$")
# u128 values never need more digits than this
_MAX_UINT_DIGITS = len(str(MAX_AMOUNT))


def parse_uint(value: Any, name: str) -> int:
    """Parse a decimal-string (or int) unsigned integer field.

    Examples:
        "5000000000000000000000000" → 5000000000000000000000000
        42 → 42
    """
    if isinstance(value, bool):
        raise SnapshotDecodeError(f"{name}: expected an unsigned integer, got {value!r}")
    if isinstance(value, int):
        result = value
    elif isinstance(value, str) and _UINT_RE.match(value.strip()):
        digits = value.strip().lstrip("0") or "0"
        if len(digits) > _MAX_UINT_DIGITS:
            raise SnapshotDecodeError(
                f"{name}: more than {_MAX_UINT_DIGITS} digits, out of range"
            )
        result = int(digits)
    else:
        # floats are refused: they cannot carry 10^24-scale amounts exactly
        raise SnapshotDecodeError(f"{name}: expected an unsigned integer, got {value!r}")
    if result < 0:
        raise SnapshotDecodeError(f"{name}: must be non-negative, got {result}")
    return result


def parse_amount_field(value: Any, name: str) -> int:
    amount = parse_uint(value, name)
    try:
        return checked(amount, name)
    except ArithmeticOverflow as e:
        raise SnapshotDecodeError(f"{name}: {e}") from e


def parse_vesting_schedule(raw: Any) -> VestingSchedule | None:
    """Decode the contract's ``vesting_schedule`` enum.

    Accepts ``None``/``"None"`` (no schedule), ``{"VestingSchedule": {...}}``
    or the inner mapping itself.
    """
    if raw is None or raw == "None":
        return None
    if not isinstance(raw, Mapping):
        raise SnapshotDecodeError(f"vesting_schedule: unexpected value {raw!r}")

    inner = raw.get("VestingSchedule", raw)
    if not isinstance(inner, Mapping):
        raise SnapshotDecodeError(f"vesting_schedule: unexpected value {raw!r}")
    try:
        return VestingSchedule(
            start_timestamp=parse_uint(inner.get("start_timestamp"), "start_timestamp"),
            cliff_timestamp=parse_uint(inner.get("cliff_timestamp"), "cliff_timestamp"),
            end_timestamp=parse_uint(inner.get("end_timestamp"), "end_timestamp"),
        )
    except SnapshotDecodeError:
        raise
    except ValueError as e:
        raise SnapshotDecodeError(f"vesting_schedule: {e}") from e


def parse_contract_version(raw: Any) -> ContractVersion:
    if isinstance(raw, ContractVersion):
        return raw
    try:
        return ContractVersion(str(raw).strip().lower())
    except ValueError:
        raise SnapshotDecodeError(f"contract_version: unknown version {raw!r}") from None


def parse_grant(raw: Mapping[str, Any]) -> LockupGrant:
    """Decode the lockup terms; ``lockup_amount`` and ``amount`` are both accepted."""
    amount = raw.get("lockup_amount", raw.get("amount"))
    if amount is None:
        raise SnapshotDecodeError("lockup: missing lockup_amount")
    return LockupGrant(
        amount=parse_amount_field(amount, "lockup_amount"),
        lockup_timestamp=parse_uint(raw.get("lockup_timestamp", 0), "lockup_timestamp"),
        release_duration=parse_uint(raw.get("release_duration", 0), "release_duration"),
        vesting_schedule=parse_vesting_schedule(raw.get("vesting_schedule")),
    )


def decode_snapshot(raw: Mapping[str, Any]) -> LockupAccountSnapshot:
    """Decode a raw account read into a :class:`LockupAccountSnapshot`."""
    if not isinstance(raw, Mapping):
        raise SnapshotDecodeError(f"snapshot: expected a mapping, got {type(raw).__name__}")
    for key in ("total_balance", "lockup", "observed_at"):
        if key not in raw:
            raise SnapshotDecodeError(f"snapshot: missing {key}")

    lockup = raw["lockup"]
    if not isinstance(lockup, Mapping):
        raise SnapshotDecodeError("snapshot: lockup must be a mapping")

    return LockupAccountSnapshot(
        total_balance=parse_amount_field(raw["total_balance"], "total_balance"),
        grant=parse_grant(lockup),
        contract_version=parse_contract_version(raw.get("contract_version", "latest")),
        observed_at=parse_uint(raw["observed_at"], "observed_at"),
        account_id=str(raw.get("account_id", "")),
    )


def encode_breakdown(breakdown: BalanceBreakdown) -> dict[str, str]:
    """Decimal-string encoding of a breakdown, for JSON consumers."""
    return {
        "total": str(breakdown.total),
        "locked": str(breakdown.locked),
        "unlocked": str(breakdown.unlocked),
        "available_to_transfer": str(breakdown.available_to_transfer),
        "reserved_for_storage": str(breakdown.reserved_for_storage),
    }
