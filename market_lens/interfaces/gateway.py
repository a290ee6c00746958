"""Contract gateway protocol — hands out per-address contract views."""
from typing import Protocol

from .instrument import Instrument
from .market_registry import MarketRegistry
from .underlying_asset import UnderlyingAsset


class ContractGateway(Protocol):
    """Resolve addresses to contract views and read native balances."""

    def instrument(self, address: str) -> Instrument: ...

    def underlying_asset(self, address: str) -> UnderlyingAsset: ...

    def market_registry(self, address: str) -> MarketRegistry: ...

    async def native_balance(self, account: str) -> int: ...
