"""Locked / unlocked / transferable figures for a lockup account snapshot."""
from __future__ import annotations

import logging

from .amounts import max_amount, sub_saturating
from .errors import InconsistentSnapshot
from .models import BalanceBreakdown, LockupAccountSnapshot, StaleBalance
from .storage import DEFAULT_POLICY, StorageReservationPolicy
from .vesting import grant_locked_amount

logger = logging.getLogger(__name__)


def compute(
    snapshot: LockupAccountSnapshot,
    policy: StorageReservationPolicy = DEFAULT_POLICY,
) -> BalanceBreakdown:
    """Derive the balance breakdown for one snapshot.

    Funds are transferable only above both the still-locked amount and the
    storage reservation, whichever is larger:

        available = max(0, total - max(reserved, locked))

    Raises:
        InconsistentSnapshot: the locked amount exceeds the total balance.
    """
    total = snapshot.total_balance
    locked = grant_locked_amount(snapshot.grant, snapshot.observed_at)
    if locked > total:
        raise InconsistentSnapshot(locked, total, snapshot.account_id)

    unlocked = sub_saturating(total, locked)
    reserved = policy.reserved_for_storage(snapshot.contract_version)
    available = sub_saturating(total, max_amount(reserved, locked))

    logger.debug(
        "Breakdown %s — total=%d locked=%d unlocked=%d reserved=%d available=%d",
        snapshot.account_id or "<unnamed>",
        total,
        locked,
        unlocked,
        reserved,
        available,
    )
    return BalanceBreakdown(
        total=total,
        locked=locked,
        unlocked=unlocked,
        available_to_transfer=available,
        reserved_for_storage=reserved,
    )


def evaluate(
    snapshot: LockupAccountSnapshot,
    policy: StorageReservationPolicy = DEFAULT_POLICY,
) -> BalanceBreakdown | StaleBalance:
    """Like :func:`compute`, but report an inconsistent snapshot as a result."""
    try:
        return compute(snapshot, policy)
    except InconsistentSnapshot as e:
        logger.warning("Balance data may be stale: %s", e)
        return StaleBalance(snapshot=snapshot, locked=e.locked, total=e.total)


class LockupBalanceCalculator:
    """Calculator bound to one storage reservation policy."""

    def __init__(self, policy: StorageReservationPolicy = DEFAULT_POLICY) -> None:
        self._policy = policy

    @property
    def policy(self) -> StorageReservationPolicy:
        return self._policy

    def compute(self, snapshot: LockupAccountSnapshot) -> BalanceBreakdown:
        return compute(snapshot, self._policy)

    def evaluate(self, snapshot: LockupAccountSnapshot) -> BalanceBreakdown | StaleBalance:
        return evaluate(snapshot, self._policy)
