"""Balance refresh orchestration — fetch snapshot, compute, keep the newest."""
from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Union

from ..calculator import LockupBalanceCalculator
from ..interfaces.presenter import BalancePresenter
from ..interfaces.snapshot_source import SnapshotSource
from ..models import BalanceBreakdown, LockupAccountSnapshot, StaleBalance

logger = logging.getLogger(__name__)

BalanceResult = Union[BalanceBreakdown, StaleBalance]


class BalanceService:
    """Refreshes lockup balances; the newest snapshot per account wins."""

    def __init__(
        self,
        source: SnapshotSource,
        calculator: LockupBalanceCalculator | None = None,
        presenter: BalancePresenter | None = None,
    ) -> None:
        self._source = source
        self._calculator = calculator or LockupBalanceCalculator()
        self._presenter = presenter
        self._latest: dict[str, tuple[LockupAccountSnapshot, BalanceResult]] = {}

    def latest(self, account_id: str) -> BalanceResult | None:
        entry = self._latest.get(account_id)
        return entry[1] if entry else None

    def _accept(self, account_id: str, snapshot: LockupAccountSnapshot, result: BalanceResult) -> bool:
        held = self._latest.get(account_id)
        if held and held[0].observed_at > snapshot.observed_at:
            logger.debug(
                "Discarding result for %s observed at %d (holding %d)",
                account_id,
                snapshot.observed_at,
                held[0].observed_at,
            )
            return False
        self._latest[account_id] = (snapshot, result)
        return True

    async def refresh(self, account_id: str) -> BalanceResult:
        """Fetch a fresh snapshot and return the newest known result.

        Errors raised by the snapshot source propagate; retrying is the
        source's job.
        """
        snapshot = await self._source.fetch_snapshot(account_id)
        result = self._calculator.evaluate(snapshot)

        if not self._accept(account_id, snapshot, result):
            return self._latest[account_id][1]

        if isinstance(result, StaleBalance):
            logger.warning("Lockup %s — balance data may be stale", account_id)
        else:
            logger.info(
                "Lockup %s — total=%d locked=%d available=%d",
                account_id,
                result.total,
                result.locked,
                result.available_to_transfer,
            )

        if self._presenter is not None:
            self._presenter.render(account_id, result)
        return result

    async def refresh_all(self, account_ids: Iterable[str]) -> dict[str, BalanceResult]:
        """Refresh several accounts concurrently."""
        ids = list(account_ids)
        results = await asyncio.gather(*(self.refresh(a) for a in ids))
        return dict(zip(ids, results))

    async def run_continuous(
        self,
        account_ids: Iterable[str],
        interval_seconds: float,
        iterations: int | None = None,
    ) -> None:
        """Refresh on a fixed interval; ``iterations=None`` runs forever."""
        ids = list(account_ids)
        logger.info(
            "Refreshing %d lockup account(s) every %.0f seconds", len(ids), interval_seconds
        )
        count = 0
        while iterations is None or count < iterations:
            count += 1
            try:
                await self.refresh_all(ids)
            except Exception as e:
                logger.error("Error refreshing lockup balances: %s", e)
            await asyncio.sleep(interval_seconds)
