"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Union

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
NATIVE_DECIMALS = 18


@dataclass(frozen=True)
class NativeMarket:
    """Instrument backed by the chain's native asset (no underlying token)."""


@dataclass(frozen=True)
class WrappedMarket:
    """Instrument backed by an underlying token contract."""

    underlying_address: str


MarketKind = Union[NativeMarket, WrappedMarket]


@dataclass(frozen=True)
class MarketMetadata:
    """Snapshot of one instrument's market state.

    Rates, ``reserve_factor``, ``exchange_rate`` and ``collateral_factor`` are
    raw fixed-point integers scaled by 1e18.
    """

    instrument_address: str
    exchange_rate: int
    supply_rate_per_block: int
    borrow_rate_per_block: int
    reserve_factor: int
    total_borrows: int
    total_reserves: int
    total_supply: int
    total_cash: int
    is_listed: bool
    collateral_factor: int
    underlying_asset_address: str
    instrument_decimals: int
    underlying_decimals: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AccountPosition:
    """One account's balances in one instrument."""

    instrument_address: str
    instrument_balance: int
    borrow_balance: int
    underlying_balance_equivalent: int
    underlying_token_balance: int
    underlying_token_allowance: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
