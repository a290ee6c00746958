"""Account position reader — one account's balances in one instrument."""
from __future__ import annotations

import logging
from typing import Sequence

from ..config import LensConfig
from ..errors import LensError
from ..interfaces.gateway import ContractGateway
from ..models import AccountPosition, WrappedMarket
from .common import expect_int, read
from .concurrency import gather_or_cancel, gather_ordered
from .market_kind import resolve_market_kind

logger = logging.getLogger(__name__)


class AccountPositionReader:
    """Fetch an account's instrument and underlying balances."""

    def __init__(self, gateway: ContractGateway, config: LensConfig) -> None:
        self._gateway = gateway
        self._config = config

    async def fetch_account_position(
        self, instrument_address: str, account: str
    ) -> AccountPosition:
        try:
            return await self._fetch(instrument_address, account)
        except LensError as e:
            raise e.with_context(instrument=instrument_address, account=account)

    async def fetch_account_position_batch(
        self, instrument_addresses: Sequence[str], account: str
    ) -> list[AccountPosition]:
        """Read ``account`` in every instrument, in order. Fails as a whole on the first error."""
        instruments = list(instrument_addresses)
        logger.info(
            "Fetching positions of %s in %d instrument(s)", account, len(instruments)
        )

        async def fetch(instrument_address: str) -> AccountPosition:
            return await self.fetch_account_position(instrument_address, account)

        records = await gather_ordered(instruments, fetch, self._config.max_concurrency)
        logger.info("Fetched %d position(s) for %s", len(records), account)
        return records

    async def _fetch(self, instrument_address: str, account: str) -> AccountPosition:
        instrument = self._gateway.instrument(instrument_address)

        balance, borrow_balance, underlying_equivalent = await gather_or_cancel(
            read("balanceOf", instrument.balance_of(account)),
            read("borrowBalanceCurrent", instrument.borrow_balance_current(account)),
            read("balanceOfUnderlying", instrument.balance_of_underlying(account)),
        )
        balance = expect_int(balance, "balanceOf")
        borrow_balance = expect_int(borrow_balance, "borrowBalanceCurrent")
        underlying_equivalent = expect_int(underlying_equivalent, "balanceOfUnderlying")

        kind = await resolve_market_kind(instrument, self._config.balance_native_marker)
        if isinstance(kind, WrappedMarket):
            asset = self._gateway.underlying_asset(kind.underlying_address)
            token_balance, allowance = await gather_or_cancel(
                read("underlying.balanceOf", asset.balance_of(account)),
                read(
                    "underlying.allowance",
                    asset.allowance(account, instrument_address),
                ),
            )
            token_balance = expect_int(token_balance, "underlying.balanceOf")
            allowance = expect_int(allowance, "underlying.allowance")
        else:
            # No allowance applies to the native asset; the full balance is available.
            token_balance = expect_int(
                await read("nativeBalance", self._gateway.native_balance(account)),
                "nativeBalance",
            )
            allowance = token_balance

        return AccountPosition(
            instrument_address=instrument_address,
            instrument_balance=balance,
            borrow_balance=borrow_balance,
            underlying_balance_equivalent=underlying_equivalent,
            underlying_token_balance=token_balance,
            underlying_token_allowance=allowance,
        )
