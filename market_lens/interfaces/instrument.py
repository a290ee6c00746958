"""Instrument protocol — read calls on a lending-market token."""
from typing import Protocol


class Instrument(Protocol):
    """Read-only view of a lending-market instrument (cToken-style)."""

    @property
    def address(self) -> str: ...

    async def exchange_rate_current(self) -> int: ...

    async def registry(self) -> str: ...

    async def symbol(self) -> str: ...

    async def supply_rate_per_block(self) -> int: ...

    async def borrow_rate_per_block(self) -> int: ...

    async def reserve_factor(self) -> int: ...

    async def total_borrows(self) -> int: ...

    async def total_reserves(self) -> int: ...

    async def total_supply(self) -> int: ...

    async def total_cash(self) -> int: ...

    async def decimals(self) -> int: ...

    async def underlying(self) -> str: ...

    async def balance_of(self, account: str) -> int: ...

    async def borrow_balance_current(self, account: str) -> int: ...

    async def balance_of_underlying(self, account: str) -> int: ...
