"""Protocol interfaces for the collaborators around the calculator."""
from .presenter import BalancePresenter
from .snapshot_source import SnapshotSource

__all__ = ["BalancePresenter", "SnapshotSource"]
