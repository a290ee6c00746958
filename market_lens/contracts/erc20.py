"""ERC-20 underlying asset binding."""
from __future__ import annotations

from .base import ContractView


class Erc20Contract(ContractView):
    async def decimals(self) -> int:
        return await self._read_one("decimals()", "uint8")

    async def balance_of(self, account: str) -> int:
        return await self._read_one("balanceOf(address)", "uint256", account)

    async def allowance(self, owner: str, spender: str) -> int:
        return await self._read_one(
            "allowance(address,address)", "uint256", owner, spender
        )
