"""Per-instrument readers."""
from .account_position import AccountPositionReader
from .market_data import MarketDataReader

__all__ = ["AccountPositionReader", "MarketDataReader"]
