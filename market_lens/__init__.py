"""Batch reader for lending-market instrument state."""
from .errors import InvalidAddress, LensError, MalformedResponse, UpstreamReadFailure
from .models import AccountPosition, MarketMetadata

__all__ = [
    "AccountPosition",
    "InvalidAddress",
    "LensError",
    "MalformedResponse",
    "MarketMetadata",
    "UpstreamReadFailure",
]
