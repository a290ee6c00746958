"""Underlying asset protocol — ERC-20 style token reads."""
from typing import Protocol


class UnderlyingAsset(Protocol):
    """Read-only view of the token an instrument wraps."""

    async def decimals(self) -> int: ...

    async def balance_of(self, account: str) -> int: ...

    async def allowance(self, owner: str, spender: str) -> int: ...
