"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from market_lens.config import AppConfig, ChainConfig, DeploymentConfig, LensConfig
from market_lens.errors import UpstreamReadFailure

# ---------------------------------------------------------------------------
# Sample addresses
# ---------------------------------------------------------------------------

F_ETH = "0x" + "11" * 20
F_USDC = "0x" + "22" * 20
USDC = "0x" + "33" * 20
REGISTRY = "0x" + "44" * 20
ACCOUNT = "0x" + "55" * 20

WAD = 10**18


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
        rpc_timeout=10,
    )


@pytest.fixture()
def sample_lens_config() -> LensConfig:
    return LensConfig(
        metadata_native_marker="fETH",
        balance_native_marker="fETH",
        native_decimals=18,
        max_concurrency=4,
    )


@pytest.fixture()
def sample_app_config(
    sample_chain_config: ChainConfig, sample_lens_config: LensConfig
) -> AppConfig:
    return AppConfig(
        chain=sample_chain_config,
        lens=sample_lens_config,
        deployment=DeploymentConfig(registry="", instruments=(F_ETH, F_USDC)),
    )


SAMPLE_YAML = textwrap.dedent(f"""\
    chain:
      rpc_endpoints: ["https://rpc.example.com"]
      rpc_timeout: 10
    lens:
      metadata_native_marker: fETH
      balance_native_marker: fETH
      native_decimals: 18
      max_concurrency: 4
    deployment:
      registry: "{REGISTRY}"
      instruments: ["{F_ETH}", "{F_USDC}"]
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------


def _make_instrument(
    symbol: str, underlying: str | None = None, **overrides: Any
) -> AsyncMock:
    """AsyncMock instrument with sensible defaults for every read."""
    instrument = AsyncMock()
    values: dict[str, Any] = {
        "exchange_rate_current": 2 * 10**17,
        "registry": REGISTRY,
        "symbol": symbol,
        "supply_rate_per_block": 1_000,
        "borrow_rate_per_block": 2_000,
        "reserve_factor": WAD // 10,
        "total_borrows": 5_000,
        "total_reserves": 100,
        "total_supply": 50_000,
        "total_cash": 20_000,
        "decimals": 8,
        "balance_of": 500,
        "borrow_balance_current": 40,
        "balance_of_underlying": 100,
    }
    values.update(overrides)
    for name, value in values.items():
        getattr(instrument, name).return_value = value

    if underlying is None:
        # Native markets have no underlying() function.
        instrument.underlying.side_effect = UpstreamReadFailure("execution reverted")
    else:
        instrument.underlying.return_value = underlying
    return instrument


def _make_asset(decimals: int = 6, balance: int = 0, allowance: int = 0) -> AsyncMock:
    asset = AsyncMock()
    asset.decimals.return_value = decimals
    asset.balance_of.return_value = balance
    asset.allowance.return_value = allowance
    return asset


def _make_registry(listed: bool = True, collateral_factor: int = 0) -> AsyncMock:
    registry = AsyncMock()
    registry.is_listed_and_collateral_factor.return_value = (listed, collateral_factor)
    return registry


def _make_gateway(
    instruments: dict[str, AsyncMock],
    assets: dict[str, AsyncMock] | None = None,
    registries: dict[str, AsyncMock] | None = None,
    native_balances: dict[str, int] | None = None,
) -> MagicMock:
    gateway = MagicMock()
    gateway.instrument.side_effect = instruments.__getitem__
    gateway.underlying_asset.side_effect = (assets or {}).__getitem__
    gateway.market_registry.side_effect = (registries or {}).__getitem__
    balances = native_balances or {}
    gateway.native_balance = AsyncMock(side_effect=lambda account: balances[account])
    return gateway


@pytest.fixture()
def make_instrument() -> Callable[..., AsyncMock]:
    return _make_instrument


@pytest.fixture()
def make_asset() -> Callable[..., AsyncMock]:
    return _make_asset


@pytest.fixture()
def make_registry() -> Callable[..., AsyncMock]:
    return _make_registry


@pytest.fixture()
def make_gateway() -> Callable[..., MagicMock]:
    return _make_gateway
