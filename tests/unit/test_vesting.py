"""Unit tests for vesting schedule evaluation — pure functions, no I/O."""
from __future__ import annotations

import pytest

from lockup_balance.errors import DegenerateSchedule
from lockup_balance.models import LockupGrant, VestingSchedule
from lockup_balance.vesting import (
    grant_locked_amount,
    locked_amount,
    release_locked_amount,
)

ONE_NEAR = 10**24
NS_PER_MINUTE = 60_000_000_000
ONE_YEAR_NS = 525_600 * NS_PER_MINUTE
NOW = 1_700_000_000_000 * 1_000_000
GRANT = 5 * ONE_NEAR


class TestLockedAmount:
    def test_half_vested_at_cliff(self, half_vested_schedule: VestingSchedule) -> None:
        assert locked_amount(GRANT, half_vested_schedule, NOW) == GRANT // 2

    def test_before_cliff_fully_locked(self) -> None:
        # started long ago, but nothing vests until the cliff is reached
        schedule = VestingSchedule(
            start_timestamp=NOW - 3 * ONE_YEAR_NS,
            cliff_timestamp=NOW + 1,
            end_timestamp=NOW + ONE_YEAR_NS,
        )
        assert locked_amount(GRANT, schedule, NOW) == GRANT

    def test_at_end_nothing_locked(self, half_vested_schedule: VestingSchedule) -> None:
        assert locked_amount(GRANT, half_vested_schedule, NOW + ONE_YEAR_NS) == 0

    def test_after_end_nothing_locked(self, half_vested_schedule: VestingSchedule) -> None:
        assert locked_amount(GRANT, half_vested_schedule, NOW + 5 * ONE_YEAR_NS) == 0

    def test_quarter_remaining(self, half_vested_schedule: VestingSchedule) -> None:
        now = NOW + ONE_YEAR_NS // 2
        assert locked_amount(GRANT, half_vested_schedule, now) == GRANT // 4

    def test_vested_rounds_down(self) -> None:
        # vested = 10 * 1 // 3 = 3, so 7 stays locked
        schedule = VestingSchedule(start_timestamp=0, cliff_timestamp=0, end_timestamp=3)
        assert locked_amount(10, schedule, 1) == 7

    def test_zero_span_raises(self) -> None:
        schedule = VestingSchedule(start_timestamp=NOW, cliff_timestamp=NOW, end_timestamp=NOW)
        with pytest.raises(DegenerateSchedule):
            locked_amount(GRANT, schedule, NOW)

    def test_zero_grant(self, half_vested_schedule: VestingSchedule) -> None:
        assert locked_amount(0, half_vested_schedule, NOW) == 0

    def test_huge_grant_exact(self, half_vested_schedule: VestingSchedule) -> None:
        grant = 10**33
        assert locked_amount(grant, half_vested_schedule, NOW) == grant // 2

    def test_monotonically_non_increasing(self) -> None:
        schedule = VestingSchedule(
            start_timestamp=NOW - ONE_YEAR_NS,
            cliff_timestamp=NOW - ONE_YEAR_NS // 3,
            end_timestamp=NOW + ONE_YEAR_NS,
        )
        step = ONE_YEAR_NS // 37
        times = range(NOW - 2 * ONE_YEAR_NS, NOW + 2 * ONE_YEAR_NS, step)
        values = [locked_amount(GRANT + 1, schedule, t) for t in times]
        assert values[0] == GRANT + 1
        assert values[-1] == 0
        assert all(a >= b for a, b in zip(values, values[1:]))


class TestReleaseLockedAmount:
    def test_before_release_point(self) -> None:
        assert release_locked_amount(GRANT, NOW, 10 * NS_PER_MINUTE, NOW) == GRANT

    def test_at_release_point(self) -> None:
        assert release_locked_amount(GRANT, NOW, 10 * NS_PER_MINUTE, NOW + 10 * NS_PER_MINUTE) == 0

    def test_zero_duration_releases_at_lockup(self) -> None:
        assert release_locked_amount(GRANT, NOW, 0, NOW - 1) == GRANT
        assert release_locked_amount(GRANT, NOW, 0, NOW) == 0


class TestGrantLockedAmount:
    def test_uses_schedule(self, half_vested_grant: LockupGrant) -> None:
        assert grant_locked_amount(half_vested_grant, NOW) == GRANT // 2

    def test_without_schedule(self) -> None:
        grant = LockupGrant(amount=GRANT, lockup_timestamp=NOW, release_duration=ONE_YEAR_NS)
        assert grant_locked_amount(grant, NOW + ONE_YEAR_NS - 1) == GRANT
        assert grant_locked_amount(grant, NOW + ONE_YEAR_NS) == 0
