"""Shared read path for contract views."""
from __future__ import annotations

from typing import Any, Sequence

from ..errors import LensError
from ..interfaces.chain import ChainClient
from .abi import decode_result, encode_call


class ContractView:
    """Read-only view of one deployed contract."""

    def __init__(self, client: ChainClient, address: str) -> None:
        self._client = client
        self._address = address

    @property
    def address(self) -> str:
        return self._address

    async def _read(
        self, signature: str, output_types: Sequence[str], *args: Any
    ) -> tuple[Any, ...]:
        try:
            data = await self._client.eth_call(
                self._address, encode_call(signature, *args)
            )
            return decode_result(output_types, data, call=signature)
        except LensError as e:
            e.call = signature
            raise

    async def _read_one(self, signature: str, output_type: str, *args: Any) -> Any:
        (value,) = await self._read(signature, (output_type,), *args)
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._address})"
