"""Market metadata reader — assembles one MarketMetadata per instrument."""
from __future__ import annotations

import logging
from typing import Sequence

from ..config import LensConfig
from ..errors import LensError
from ..interfaces.gateway import ContractGateway
from ..interfaces.instrument import Instrument
from ..interfaces.market_registry import MarketRegistry
from ..models import ZERO_ADDRESS, MarketMetadata, WrappedMarket
from .common import expect_int, expect_listing, expect_str, read
from .concurrency import gather_or_cancel, gather_ordered
from .market_kind import resolve_market_kind

logger = logging.getLogger(__name__)


class MarketDataReader:
    """Fetch market-level state for lending instruments.

    ``registry`` is the market registry to consult for listing status and
    collateral factors. When omitted, each instrument's own registry reference
    is followed.
    """

    def __init__(
        self,
        gateway: ContractGateway,
        config: LensConfig,
        registry: MarketRegistry | None = None,
    ) -> None:
        self._gateway = gateway
        self._config = config
        self._registry = registry

    async def fetch_market_metadata(self, instrument_address: str) -> MarketMetadata:
        """Read one instrument; any failed call aborts the whole record."""
        try:
            return await self._fetch(instrument_address)
        except LensError as e:
            raise e.with_context(instrument=instrument_address)

    async def fetch_market_metadata_batch(
        self, instrument_addresses: Sequence[str]
    ) -> list[MarketMetadata]:
        """Read every instrument, in order. Fails as a whole on the first error."""
        instruments = list(instrument_addresses)
        logger.info("Fetching market metadata for %d instrument(s)", len(instruments))
        records = await gather_ordered(
            instruments, self.fetch_market_metadata, self._config.max_concurrency
        )
        logger.info("Fetched market metadata for %d instrument(s)", len(records))
        return records

    async def _registry_for(self, instrument: Instrument) -> MarketRegistry:
        if self._registry is not None:
            return self._registry
        address = expect_str(await read("comptroller", instrument.registry()), "comptroller")
        return self._gateway.market_registry(address)

    async def _fetch(self, instrument_address: str) -> MarketMetadata:
        instrument = self._gateway.instrument(instrument_address)

        exchange_rate = expect_int(
            await read("exchangeRateCurrent", instrument.exchange_rate_current()),
            "exchangeRateCurrent",
        )

        registry = await self._registry_for(instrument)
        is_listed, collateral_factor = expect_listing(
            await read(
                "markets", registry.is_listed_and_collateral_factor(instrument_address)
            ),
            "markets",
        )

        kind = await resolve_market_kind(instrument, self._config.metadata_native_marker)
        if isinstance(kind, WrappedMarket):
            underlying_address = kind.underlying_address
            asset = self._gateway.underlying_asset(underlying_address)
            underlying_decimals = expect_int(
                await read("underlying.decimals", asset.decimals()), "underlying.decimals"
            )
        else:
            underlying_address = ZERO_ADDRESS
            underlying_decimals = self._config.native_decimals

        calls = {
            "supplyRatePerBlock": instrument.supply_rate_per_block(),
            "borrowRatePerBlock": instrument.borrow_rate_per_block(),
            "reserveFactorMantissa": instrument.reserve_factor(),
            "totalBorrows": instrument.total_borrows(),
            "totalReserves": instrument.total_reserves(),
            "totalSupply": instrument.total_supply(),
            "getCash": instrument.total_cash(),
            "decimals": instrument.decimals(),
        }
        values = await gather_or_cancel(
            *(read(name, aw) for name, aw in calls.items())
        )
        (
            supply_rate,
            borrow_rate,
            reserve_factor,
            total_borrows,
            total_reserves,
            total_supply,
            total_cash,
            instrument_decimals,
        ) = (expect_int(value, name) for name, value in zip(calls, values))

        logger.debug(
            "Market %s: listed=%s kind=%s", instrument_address, is_listed, kind
        )

        return MarketMetadata(
            instrument_address=instrument_address,
            exchange_rate=exchange_rate,
            supply_rate_per_block=supply_rate,
            borrow_rate_per_block=borrow_rate,
            reserve_factor=reserve_factor,
            total_borrows=total_borrows,
            total_reserves=total_reserves,
            total_supply=total_supply,
            total_cash=total_cash,
            is_listed=is_listed,
            collateral_factor=collateral_factor,
            underlying_asset_address=underlying_address,
            instrument_decimals=instrument_decimals,
            underlying_decimals=underlying_decimals,
        )
