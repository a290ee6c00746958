"""EVM JSON-RPC client with fallback support."""
import logging
import ssl
from typing import Any

import aiohttp
import certifi
from eth_utils import decode_hex, is_hex

from ...config import ChainConfig
from ...errors import MalformedResponse, UpstreamReadFailure

logger = logging.getLogger(__name__)

BLOCK_TAG = "latest"


class EvmClient:
    """EVM node RPC client with automatic endpoint fallback."""

    def __init__(self, config: ChainConfig) -> None:
        self.endpoints = list(config.rpc_endpoints)
        self.timeout = config.rpc_timeout
        self.current_rpc_index = 0

    async def rpc_call(self, method: str, params: list[Any]) -> Any:
        """Make RPC call with fallback to alternative endpoints."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            rpc_index = (self.current_rpc_index + attempt) % len(self.endpoints)
            rpc_url = self.endpoints[rpc_index]

            try:
                connector = aiohttp.TCPConnector(ssl=ssl_context)
                async with aiohttp.ClientSession(connector=connector) as session:
                    async with session.post(
                        rpc_url,
                        json=payload,
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                    ) as response:
                        result = await response.json()
                        if "error" in result:
                            raise RuntimeError(f"RPC Error: {result['error']}")

                        if rpc_index != self.current_rpc_index:
                            logger.info("Switched to RPC endpoint: %s", rpc_url)
                            self.current_rpc_index = rpc_index

                        return result.get("result")
            except Exception as e:
                last_error = e
                logger.warning("RPC endpoint %s failed: %s", rpc_url, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

        raise UpstreamReadFailure(
            f"All RPC endpoints failed. Last error: {last_error}", call=method
        )

    async def eth_call(self, to: str, data: bytes) -> bytes:
        """Execute a read-only call against ``to`` and return the raw return data."""
        result = await self.rpc_call(
            "eth_call", [{"to": to, "data": "0x" + data.hex()}, BLOCK_TAG]
        )
        if not isinstance(result, str) or not is_hex(result):
            raise MalformedResponse(
                f"eth_call returned non-hex data: {result!r}", call="eth_call"
            )
        return decode_hex(result)

    async def get_balance(self, address: str) -> int:
        """Native-asset balance of ``address`` in wei."""
        result = await self.rpc_call("eth_getBalance", [address, BLOCK_TAG])
        try:
            return int(result, 16)
        except (TypeError, ValueError) as e:
            raise MalformedResponse(
                f"eth_getBalance returned non-hex data: {result!r}",
                call="eth_getBalance",
            ) from e
