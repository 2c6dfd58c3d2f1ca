"""Storage reservation floor per lockup contract version.

Older and newer lockup contract code keep different amounts of the account
balance back to pay for on-chain storage. Version-specific constants live
only in this table (or in the ``storage.reservations`` config section).
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from .amounts import checked
from .errors import UnknownContractVersion
from .formatting import NEAR_NOMINATION_EXP, parse_amount
from .models import ContractVersion

logger = logging.getLogger(__name__)

# Display-scale amounts (NEAR), converted to the smallest unit below.
DEFAULT_RESERVATIONS: Mapping[ContractVersion, str] = MappingProxyType(
    {
        ContractVersion.V2: "35",
        ContractVersion.LATEST: "3.5",
    }
)


class StorageReservationPolicy:
    """Lookup table from contract version to reserved amount."""

    def __init__(self, reservations: Mapping[ContractVersion, int]) -> None:
        self._reservations = MappingProxyType(
            {
                version: checked(amount, "reservation")
                for version, amount in reservations.items()
            }
        )

    @classmethod
    def from_display(
        cls,
        reservations: Mapping[ContractVersion, str],
        nomination_exp: int = NEAR_NOMINATION_EXP,
    ) -> StorageReservationPolicy:
        """Build a policy from display-scale strings such as ``"3.5"``."""
        return cls(
            {
                version: parse_amount(text, nomination_exp)
                for version, text in reservations.items()
            }
        )

    @property
    def versions(self) -> tuple[ContractVersion, ...]:
        return tuple(self._reservations)

    def reserved_for_storage(self, version: ContractVersion) -> int:
        try:
            return self._reservations[version]
        except KeyError:
            raise UnknownContractVersion(version) from None

    def with_overrides(
        self, overrides: Mapping[ContractVersion, int]
    ) -> StorageReservationPolicy:
        """Return a new policy with ``overrides`` layered over this table."""
        merged = dict(self._reservations)
        merged.update(overrides)
        logger.debug(
            "Storage reservations overridden for %s",
            sorted(v.value for v in overrides),
        )
        return StorageReservationPolicy(merged)


DEFAULT_POLICY = StorageReservationPolicy.from_display(DEFAULT_RESERVATIONS)


def reserved_for_storage(version: ContractVersion) -> int:
    """Reserved amount for ``version`` under the default table."""
    return DEFAULT_POLICY.reserved_for_storage(version)
