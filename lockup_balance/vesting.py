"""Locked-amount evaluation for vesting schedules — pure functions, no I/O."""
from __future__ import annotations

from .amounts import checked, mul_div
from .errors import DegenerateSchedule
from .models import LockupGrant, VestingSchedule


def locked_amount(total_vesting_amount: int, schedule: VestingSchedule, now: int) -> int:
    """Amount of a grant still locked by its vesting schedule at ``now``.

    Nothing vests before the cliff, even when the schedule started earlier.
    Between cliff and end the grant vests linearly from ``start_timestamp``:

        vested = total * (now - start) // (end - start)
        locked = total - vested

    Raises DegenerateSchedule when start and end coincide.
    """
    checked(total_vesting_amount, "locked_amount")
    if schedule.span == 0:
        raise DegenerateSchedule(schedule.start_timestamp)

    if now < schedule.cliff_timestamp:
        return total_vesting_amount
    if now >= schedule.end_timestamp:
        return 0

    elapsed = now - schedule.start_timestamp
    vested = mul_div(total_vesting_amount, elapsed, schedule.span)
    return total_vesting_amount - vested


def release_locked_amount(
    total_vesting_amount: int, lockup_timestamp: int, release_duration: int, now: int
) -> int:
    """Locked amount for a grant without a schedule: all or nothing."""
    checked(total_vesting_amount, "release_locked_amount")
    if now < lockup_timestamp + release_duration:
        return total_vesting_amount
    return 0


def grant_locked_amount(grant: LockupGrant, now: int) -> int:
    if grant.vesting_schedule is None:
        return release_locked_amount(
            grant.amount, grant.lockup_timestamp, grant.release_duration, now
        )
    return locked_amount(grant.amount, grant.vesting_schedule, now)
