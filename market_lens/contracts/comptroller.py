"""Comptroller (market registry) binding."""
from __future__ import annotations

from .base import ContractView


class ComptrollerContract(ContractView):
    async def is_listed_and_collateral_factor(self, instrument: str) -> tuple[bool, int]:
        # Newer comptrollers append extra fields (isComped); only the leading pair is read.
        is_listed, collateral_factor = await self._read(
            "markets(address)", ("bool", "uint256"), instrument
        )
        return is_listed, collateral_factor
