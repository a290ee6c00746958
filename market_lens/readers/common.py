"""Call wrapping and response-shape checks shared by the readers."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable

from ..errors import LensError, MalformedResponse, UpstreamReadFailure


async def read(call: str, awaitable: Awaitable[Any]) -> Any:
    """Await one collaborator call, tagging any failure with ``call``.

    Timeouts and dropped connections become UpstreamReadFailure.
    """
    try:
        return await awaitable
    except LensError as e:
        raise e.with_context(call=call)
    except (asyncio.TimeoutError, TimeoutError) as e:
        raise UpstreamReadFailure(f"timed out: {e}", call=call) from e
    except ConnectionError as e:
        raise UpstreamReadFailure(f"connection failed: {e}", call=call) from e


def expect_int(value: Any, call: str) -> int:
    """Check an unsigned integer magnitude."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedResponse(f"expected an integer, got {value!r}", call=call)
    if value < 0:
        raise MalformedResponse(f"expected an unsigned value, got {value}", call=call)
    return value


def expect_str(value: Any, call: str) -> str:
    """Check a string result (symbol or address)."""
    if not isinstance(value, str):
        raise MalformedResponse(f"expected a string, got {value!r}", call=call)
    return value


def expect_listing(value: Any, call: str) -> tuple[bool, int]:
    """Check the registry's ``(is_listed, collateral_factor)`` pair."""
    if not isinstance(value, (tuple, list)) or len(value) != 2:
        raise MalformedResponse(f"expected a 2-tuple, got {value!r}", call=call)
    is_listed, collateral_factor = value
    if not isinstance(is_listed, bool):
        raise MalformedResponse(f"expected a bool listing flag, got {is_listed!r}", call=call)
    return is_listed, expect_int(collateral_factor, call)
