"""Protocol interfaces for the market lens."""
from .chain import ChainClient
from .gateway import ContractGateway
from .instrument import Instrument
from .market_registry import MarketRegistry
from .underlying_asset import UnderlyingAsset

__all__ = [
    "ChainClient",
    "ContractGateway",
    "Instrument",
    "MarketRegistry",
    "UnderlyingAsset",
]
