"""Chain client protocol — EVM JSON-RPC abstraction."""
from typing import Protocol


class ChainClient(Protocol):
    """Abstract interface for read-only EVM RPC interactions."""

    async def eth_call(self, to: str, data: bytes) -> bytes: ...

    async def get_balance(self, address: str) -> int: ...
