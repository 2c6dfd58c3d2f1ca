"""Presenter protocol — renders calculator results."""
from typing import Protocol, Union

from ..models import BalanceBreakdown, StaleBalance


class BalancePresenter(Protocol):
    """Abstract interface for showing a balance result to the user."""

    def render(
        self, account_id: str, result: Union[BalanceBreakdown, StaleBalance]
    ) -> None: ...
