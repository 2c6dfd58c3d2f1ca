"""Error taxonomy for the lockup balance calculator."""
from __future__ import annotations


class LockupBalanceError(Exception):
    """Base class for every error raised by this package."""


class ArithmeticOverflow(LockupBalanceError, OverflowError):
    """An amount fell outside the supported unsigned 128-bit range."""

    def __init__(self, value: int, operation: str = "") -> None:
        self.value = value
        self.operation = operation
        where = f" in {operation}" if operation else ""
        super().__init__(f"Amount {value} out of range{where}")


class DegenerateSchedule(LockupBalanceError, ValueError):
    """Vesting schedule whose start and end coincide."""

    def __init__(self, timestamp: int) -> None:
        self.timestamp = timestamp
        super().__init__(
            f"Vesting schedule has zero length (start == end == {timestamp})"
        )


class InconsistentSnapshot(LockupBalanceError):
    """Locked amount exceeds the account's total balance.

    The account read is stale or corrupt; the figures are not clamped.
    """

    def __init__(self, locked: int, total: int, account_id: str = "") -> None:
        self.locked = locked
        self.total = total
        self.account_id = account_id
        super().__init__(
            f"Locked amount {locked} exceeds total balance {total}"
            + (f" for {account_id}" if account_id else "")
        )


class UnknownContractVersion(LockupBalanceError, KeyError):
    """No storage reservation is known for a contract version."""

    def __str__(self) -> str:
        return f"No storage reservation for contract version {self.args[0]!r}"


class SnapshotDecodeError(LockupBalanceError, ValueError):
    """Raw account state could not be decoded into a snapshot."""
