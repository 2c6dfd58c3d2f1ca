"""Snapshot source protocol — reads lockup account state from the ledger."""
from typing import Protocol

from ..models import LockupAccountSnapshot


class SnapshotSource(Protocol):
    """Abstract interface for fetching fresh lockup account snapshots."""

    async def fetch_snapshot(self, account_id: str) -> LockupAccountSnapshot: ...
