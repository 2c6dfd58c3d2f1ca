"""Shared test fixtures and sample data."""
from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from lockup_balance.models import (
    ContractVersion,
    LockupAccountSnapshot,
    LockupGrant,
    VestingSchedule,
)

ONE_NEAR = 10**24
NS_PER_MINUTE = 60_000_000_000
ONE_YEAR_NS = 525_600 * NS_PER_MINUTE
NOW = 1_700_000_000_000 * 1_000_000  # ms → ns


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def half_vested_schedule() -> VestingSchedule:
    """Started a year ago, ends a year from now, cliff right now."""
    return VestingSchedule(
        start_timestamp=NOW - ONE_YEAR_NS,
        cliff_timestamp=NOW,
        end_timestamp=NOW + ONE_YEAR_NS,
    )


@pytest.fixture()
def half_vested_grant(half_vested_schedule: VestingSchedule) -> LockupGrant:
    return LockupGrant(
        amount=5 * ONE_NEAR,
        lockup_timestamp=NOW - 60 * NS_PER_MINUTE,
        release_duration=0,
        vesting_schedule=half_vested_schedule,
    )


@pytest.fixture()
def latest_snapshot(half_vested_grant: LockupGrant) -> LockupAccountSnapshot:
    return LockupAccountSnapshot(
        total_balance=6 * ONE_NEAR,
        grant=half_vested_grant,
        contract_version=ContractVersion.LATEST,
        observed_at=NOW,
        account_id="latest.lockup.test.near",
    )


@pytest.fixture()
def v2_snapshot(half_vested_grant: LockupGrant) -> LockupAccountSnapshot:
    return LockupAccountSnapshot(
        total_balance=6 * ONE_NEAR,
        grant=half_vested_grant,
        contract_version=ContractVersion.V2,
        observed_at=NOW,
        account_id="v2.lockup.test.near",
    )


# ---------------------------------------------------------------------------
# Raw on-chain data
# ---------------------------------------------------------------------------


@pytest.fixture()
def raw_snapshot() -> dict:
    return {
        "account_id": "latest.lockup.test.near",
        "total_balance": str(6 * ONE_NEAR),
        "contract_version": "latest",
        "observed_at": str(NOW),
        "lockup": {
            "lockup_amount": str(5 * ONE_NEAR),
            "lockup_timestamp": str(NOW - 60 * NS_PER_MINUTE),
            "release_duration": "0",
            "vesting_schedule": {
                "VestingSchedule": {
                    "start_timestamp": str(NOW - ONE_YEAR_NS),
                    "cliff_timestamp": str(NOW),
                    "end_timestamp": str(NOW + ONE_YEAR_NS),
                }
            },
        },
    }


@pytest.fixture()
def raw_snapshot_path(tmp_path: Path, raw_snapshot: dict) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(raw_snapshot))
    return path


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    token:
      symbol: NEAR
      nomination_exp: 24
    display:
      default_decimals: 2
      field_decimals: {total: 5}
    storage:
      reservations:
        v2: "35"
        latest: "3.5"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
