"""Lockup account vesting balance calculator."""
from .calculator import LockupBalanceCalculator, compute, evaluate
from .errors import (
    ArithmeticOverflow,
    DegenerateSchedule,
    InconsistentSnapshot,
    LockupBalanceError,
    SnapshotDecodeError,
    UnknownContractVersion,
)
from .formatting import format_amount, parse_amount
from .models import (
    BalanceBreakdown,
    ContractVersion,
    LockupAccountSnapshot,
    LockupGrant,
    StaleBalance,
    VestingSchedule,
)
from .snapshot import decode_snapshot
from .storage import StorageReservationPolicy, reserved_for_storage
from .vesting import locked_amount

__all__ = [
    "ArithmeticOverflow",
    "BalanceBreakdown",
    "ContractVersion",
    "DegenerateSchedule",
    "InconsistentSnapshot",
    "LockupAccountSnapshot",
    "LockupBalanceCalculator",
    "LockupBalanceError",
    "LockupGrant",
    "SnapshotDecodeError",
    "StaleBalance",
    "StorageReservationPolicy",
    "UnknownContractVersion",
    "VestingSchedule",
    "compute",
    "decode_snapshot",
    "evaluate",
    "format_amount",
    "locked_amount",
    "parse_amount",
    "reserved_for_storage",
]
