"""Integration tests for MarketDataReader with mocked collaborators."""
from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from market_lens.config import LensConfig
from market_lens.errors import MalformedResponse, UpstreamReadFailure
from market_lens.models import ZERO_ADDRESS
from market_lens.readers import MarketDataReader

F_ETH = "0x" + "11" * 20
F_USDC = "0x" + "22" * 20
USDC = "0x" + "33" * 20
REGISTRY = "0x" + "44" * 20
F_DAI = "0x" + "66" * 20
DAI = "0x" + "77" * 20


@pytest.fixture()
def markets(make_instrument, make_asset, make_registry, make_gateway) -> MagicMock:
    instruments = {
        F_ETH: make_instrument("fETH"),
        F_USDC: make_instrument("fUSDC", underlying=USDC),
        F_DAI: make_instrument("fDAI", underlying=DAI),
    }
    assets = {USDC: make_asset(decimals=6), DAI: make_asset(decimals=18)}
    registries = {REGISTRY: make_registry(listed=True, collateral_factor=75 * 10**16)}
    return make_gateway(instruments, assets, registries)


@pytest.fixture()
def reader(markets: MagicMock, sample_lens_config: LensConfig) -> MarketDataReader:
    return MarketDataReader(markets, sample_lens_config)


class TestFetchMarketMetadata:
    @pytest.mark.asyncio
    async def test_native_market(self, reader: MarketDataReader, markets: MagicMock) -> None:
        meta = await reader.fetch_market_metadata(F_ETH)

        assert meta.instrument_address == F_ETH
        assert meta.exchange_rate == 2 * 10**17
        assert meta.is_listed is True
        assert meta.collateral_factor == 75 * 10**16
        assert meta.underlying_asset_address == ZERO_ADDRESS
        assert meta.underlying_decimals == 18
        markets.underlying_asset.assert_not_called()
        markets.instrument(F_ETH).underlying.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrapped_market(self, reader: MarketDataReader) -> None:
        meta = await reader.fetch_market_metadata(F_USDC)

        assert meta.underlying_asset_address == USDC
        assert meta.underlying_decimals == 6
        assert meta.instrument_decimals == 8
        assert meta.supply_rate_per_block == 1_000
        assert meta.borrow_rate_per_block == 2_000
        assert meta.reserve_factor == 10**17
        assert meta.total_borrows == 5_000
        assert meta.total_reserves == 100
        assert meta.total_supply == 50_000
        assert meta.total_cash == 20_000

    @pytest.mark.asyncio
    async def test_uses_current_exchange_rate(
        self, reader: MarketDataReader, markets: MagicMock
    ) -> None:
        await reader.fetch_market_metadata(F_USDC)
        markets.instrument(F_USDC).exchange_rate_current.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_registry_resolved_from_instrument(
        self, reader: MarketDataReader, markets: MagicMock
    ) -> None:
        await reader.fetch_market_metadata(F_USDC)

        markets.market_registry.assert_called_with(REGISTRY)
        registry = markets.market_registry(REGISTRY)
        registry.is_listed_and_collateral_factor.assert_awaited_with(F_USDC)

    @pytest.mark.asyncio
    async def test_injected_registry_takes_precedence(
        self, markets: MagicMock, make_registry, sample_lens_config: LensConfig
    ) -> None:
        injected = make_registry(listed=False, collateral_factor=0)
        reader = MarketDataReader(markets, sample_lens_config, registry=injected)

        meta = await reader.fetch_market_metadata(F_USDC)

        assert meta.is_listed is False
        markets.instrument(F_USDC).registry.assert_not_called()
        markets.market_registry.assert_not_called()

    @pytest.mark.asyncio
    async def test_unlisted_collateral_factor_returned_verbatim(
        self, markets: MagicMock, make_registry, sample_lens_config: LensConfig
    ) -> None:
        registry = make_registry(listed=False, collateral_factor=5 * 10**17)
        reader = MarketDataReader(markets, sample_lens_config, registry=registry)

        meta = await reader.fetch_market_metadata(F_DAI)

        assert meta.is_listed is False
        assert meta.collateral_factor == 5 * 10**17

    @pytest.mark.asyncio
    async def test_metadata_marker_drives_branch(self, markets: MagicMock) -> None:
        """The metadata reader matches on its own marker, not the balance marker."""
        config = LensConfig(metadata_native_marker="fUSDC", balance_native_marker="fETH")
        reader = MarketDataReader(markets, config)

        usdc = await reader.fetch_market_metadata(F_USDC)

        assert usdc.underlying_asset_address == ZERO_ADDRESS
        assert usdc.underlying_decimals == 18

    @pytest.mark.asyncio
    async def test_configured_native_decimals(self, markets: MagicMock) -> None:
        reader = MarketDataReader(markets, LensConfig(native_decimals=12))
        meta = await reader.fetch_market_metadata(F_ETH)
        assert meta.underlying_decimals == 12

    @pytest.mark.asyncio
    async def test_upstream_failure_carries_instrument(
        self, reader: MarketDataReader, markets: MagicMock
    ) -> None:
        markets.instrument(F_USDC).total_reserves.side_effect = UpstreamReadFailure(
            "execution reverted"
        )

        with pytest.raises(UpstreamReadFailure) as excinfo:
            await reader.fetch_market_metadata(F_USDC)

        assert excinfo.value.instrument == F_USDC
        assert excinfo.value.call == "totalReserves"

    @pytest.mark.asyncio
    async def test_timeout_becomes_upstream_failure(
        self, reader: MarketDataReader, markets: MagicMock
    ) -> None:
        markets.instrument(F_USDC).exchange_rate_current.side_effect = asyncio.TimeoutError()

        with pytest.raises(UpstreamReadFailure) as excinfo:
            await reader.fetch_market_metadata(F_USDC)
        assert excinfo.value.call == "exchangeRateCurrent"

    @pytest.mark.asyncio
    async def test_underlying_decimals_failure_aborts(
        self, reader: MarketDataReader, markets: MagicMock
    ) -> None:
        markets.underlying_asset(USDC).decimals.side_effect = UpstreamReadFailure("revert")

        with pytest.raises(UpstreamReadFailure):
            await reader.fetch_market_metadata(F_USDC)

    @pytest.mark.asyncio
    async def test_wrong_arity_listing_is_malformed(
        self, markets: MagicMock, sample_lens_config: LensConfig
    ) -> None:
        registry = AsyncMock()
        registry.is_listed_and_collateral_factor.return_value = (True, 1, False)
        reader = MarketDataReader(markets, sample_lens_config, registry=registry)

        with pytest.raises(MalformedResponse) as excinfo:
            await reader.fetch_market_metadata(F_USDC)
        assert excinfo.value.instrument == F_USDC

    @pytest.mark.asyncio
    async def test_non_integer_rate_is_malformed(
        self, reader: MarketDataReader, markets: MagicMock
    ) -> None:
        markets.instrument(F_USDC).supply_rate_per_block.return_value = "1000"

        with pytest.raises(MalformedResponse, match="expected an integer"):
            await reader.fetch_market_metadata(F_USDC)


class TestFetchMarketMetadataBatch:
    @pytest.mark.asyncio
    async def test_preserves_order(self, reader: MarketDataReader) -> None:
        records = await reader.fetch_market_metadata_batch([F_DAI, F_ETH, F_USDC])
        assert [r.instrument_address for r in records] == [F_DAI, F_ETH, F_USDC]
        assert [r.underlying_asset_address for r in records] == [DAI, ZERO_ADDRESS, USDC]

    @pytest.mark.asyncio
    async def test_empty_batch(self, reader: MarketDataReader) -> None:
        assert await reader.fetch_market_metadata_batch([]) == []

    @pytest.mark.asyncio
    async def test_single_failure_fails_whole_batch(
        self, reader: MarketDataReader, markets: MagicMock
    ) -> None:
        markets.instrument(F_ETH).symbol.side_effect = UpstreamReadFailure("node down")

        with pytest.raises(UpstreamReadFailure) as excinfo:
            await reader.fetch_market_metadata_batch([F_USDC, F_ETH, F_DAI])
        assert excinfo.value.instrument == F_ETH

    @pytest.mark.asyncio
    async def test_caller_cancellation(
        self, markets: MagicMock, sample_lens_config: LensConfig
    ) -> None:
        started = asyncio.Event()

        async def stall() -> int:
            started.set()
            await asyncio.sleep(10)
            return 0

        markets.instrument(F_USDC).exchange_rate_current.side_effect = stall
        reader = MarketDataReader(markets, sample_lens_config)

        task = asyncio.create_task(reader.fetch_market_metadata_batch([F_USDC]))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
