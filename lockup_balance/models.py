"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ContractVersion(str, Enum):
    """Lockup contract code version; selects the storage reservation."""

    V2 = "v2"
    LATEST = "latest"


@dataclass(frozen=True)
class VestingSchedule:
    """Linear vesting with a cliff. Timestamps are nanoseconds since epoch."""

    start_timestamp: int
    cliff_timestamp: int
    end_timestamp: int

    def __post_init__(self) -> None:
        if not (self.start_timestamp <= self.cliff_timestamp <= self.end_timestamp):
            raise ValueError(
                "Vesting schedule must satisfy start <= cliff <= end, got "
                f"{self.start_timestamp} / {self.cliff_timestamp} / {self.end_timestamp}"
            )

    @property
    def span(self) -> int:
        return self.end_timestamp - self.start_timestamp


@dataclass(frozen=True)
class LockupGrant:
    """Terms of a single lockup contract."""

    amount: int
    lockup_timestamp: int = 0
    release_duration: int = 0
    vesting_schedule: VestingSchedule | None = None

    @property
    def release_point(self) -> int:
        """Moment an unvested grant is released in full."""
        return self.lockup_timestamp + self.release_duration


@dataclass(frozen=True)
class LockupAccountSnapshot:
    """Point-in-time read of a lockup account's on-chain state."""

    total_balance: int
    grant: LockupGrant
    contract_version: ContractVersion
    observed_at: int
    account_id: str = ""


@dataclass(frozen=True)
class BalanceBreakdown:
    """Derived balance figures for one snapshot, all in the smallest unit."""

    total: int
    locked: int
    unlocked: int
    available_to_transfer: int
    reserved_for_storage: int

    @property
    def can_transfer(self) -> bool:
        """Whether a transfer-to-wallet action should be offered."""
        return self.available_to_transfer > 0


@dataclass(frozen=True)
class StaleBalance:
    """Result variant for a snapshot whose locked amount exceeds its total."""

    snapshot: LockupAccountSnapshot
    locked: int
    total: int

    @property
    def can_transfer(self) -> bool:
        return False
