"""Contract gateway backed by an EVM chain client."""
from __future__ import annotations

from ..interfaces.chain import ChainClient
from .comptroller import ComptrollerContract
from .ctoken import CTokenContract
from .erc20 import Erc20Contract


class EvmContractGateway:
    """Hand out contract views that share one chain client."""

    def __init__(self, client: ChainClient) -> None:
        self._client = client

    def instrument(self, address: str) -> CTokenContract:
        return CTokenContract(self._client, address)

    def underlying_asset(self, address: str) -> Erc20Contract:
        return Erc20Contract(self._client, address)

    def market_registry(self, address: str) -> ComptrollerContract:
        return ComptrollerContract(self._client, address)

    async def native_balance(self, account: str) -> int:
        return await self._client.get_balance(account)
