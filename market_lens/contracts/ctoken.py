"""cToken-style instrument binding."""
from __future__ import annotations

from .base import ContractView


class CTokenContract(ContractView):
    """Read calls on a Compound-style lending-market token."""

    async def exchange_rate_current(self) -> int:
        # Accrues interest in a simulated call, so the rate reflects the latest block.
        return await self._read_one("exchangeRateCurrent()", "uint256")

    async def registry(self) -> str:
        return await self._read_one("comptroller()", "address")

    async def symbol(self) -> str:
        return await self._read_one("symbol()", "string")

    async def supply_rate_per_block(self) -> int:
        return await self._read_one("supplyRatePerBlock()", "uint256")

    async def borrow_rate_per_block(self) -> int:
        return await self._read_one("borrowRatePerBlock()", "uint256")

    async def reserve_factor(self) -> int:
        return await self._read_one("reserveFactorMantissa()", "uint256")

    async def total_borrows(self) -> int:
        return await self._read_one("totalBorrows()", "uint256")

    async def total_reserves(self) -> int:
        return await self._read_one("totalReserves()", "uint256")

    async def total_supply(self) -> int:
        return await self._read_one("totalSupply()", "uint256")

    async def total_cash(self) -> int:
        return await self._read_one("getCash()", "uint256")

    async def decimals(self) -> int:
        return await self._read_one("decimals()", "uint8")

    async def underlying(self) -> str:
        return await self._read_one("underlying()", "address")

    async def balance_of(self, account: str) -> int:
        return await self._read_one("balanceOf(address)", "uint256", account)

    async def borrow_balance_current(self, account: str) -> int:
        return await self._read_one("borrowBalanceCurrent(address)", "uint256", account)

    async def balance_of_underlying(self, account: str) -> int:
        return await self._read_one("balanceOfUnderlying(address)", "uint256", account)
