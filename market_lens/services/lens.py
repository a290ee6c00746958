"""Lens facade — wires config, transport and readers together."""
from __future__ import annotations

import logging
from typing import Sequence

from ..chains.evm import EvmClient
from ..config import AppConfig
from ..contracts import EvmContractGateway
from ..interfaces.gateway import ContractGateway
from ..interfaces.market_registry import MarketRegistry
from ..models import AccountPosition, MarketMetadata
from ..readers import AccountPositionReader, MarketDataReader

logger = logging.getLogger(__name__)


class Lens:
    """Batch read-aggregator over one deployment's lending markets."""

    def __init__(
        self, config: AppConfig, gateway: ContractGateway | None = None
    ) -> None:
        self._config = config

        if gateway is None:
            gateway = EvmContractGateway(EvmClient(config.chain))
        self._gateway = gateway

        registry: MarketRegistry | None = None
        if config.deployment.registry:
            registry = gateway.market_registry(config.deployment.registry)
            logger.info("Using market registry %s", config.deployment.registry)

        self._markets = MarketDataReader(gateway, config.lens, registry)
        self._positions = AccountPositionReader(gateway, config.lens)

    def _instruments(self, instruments: Sequence[str] | None) -> list[str]:
        if instruments is not None:
            return list(instruments)
        return list(self._config.deployment.instruments)

    async def fetch_market_metadata(self, instrument: str) -> MarketMetadata:
        return await self._markets.fetch_market_metadata(instrument)

    async def fetch_market_metadata_batch(
        self, instruments: Sequence[str] | None = None
    ) -> list[MarketMetadata]:
        """Metadata for ``instruments`` (default: the configured deployment list)."""
        return await self._markets.fetch_market_metadata_batch(
            self._instruments(instruments)
        )

    async def fetch_account_position(
        self, instrument: str, account: str
    ) -> AccountPosition:
        return await self._positions.fetch_account_position(instrument, account)

    async def fetch_account_position_batch(
        self, account: str, instruments: Sequence[str] | None = None
    ) -> list[AccountPosition]:
        """Positions of ``account`` (default instruments: the configured deployment list)."""
        return await self._positions.fetch_account_position_batch(
            self._instruments(instruments), account
        )
