"""Market registry protocol — listing status and collateral parameters."""
from typing import Protocol


class MarketRegistry(Protocol):
    """Authority on which instruments are listed and their collateral factors."""

    async def is_listed_and_collateral_factor(
        self, instrument: str
    ) -> tuple[bool, int]: ...
