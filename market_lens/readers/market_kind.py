"""Native vs wrapped market resolution."""
from __future__ import annotations

from eth_utils import keccak

from ..interfaces.instrument import Instrument
from ..models import MarketKind, NativeMarket, WrappedMarket
from .common import expect_str, read


def symbols_match(symbol: str, marker: str) -> bool:
    """Compare by keccak-256 of the UTF-8 content."""
    return keccak(text=symbol) == keccak(text=marker)


async def resolve_market_kind(instrument: Instrument, native_marker: str) -> MarketKind:
    """Decide once whether ``instrument`` is the native-asset market."""
    symbol = expect_str(await read("symbol", instrument.symbol()), "symbol")
    if symbols_match(symbol, native_marker):
        return NativeMarket()

    underlying = expect_str(await read("underlying", instrument.underlying()), "underlying")
    return WrappedMarket(underlying_address=underlying)
