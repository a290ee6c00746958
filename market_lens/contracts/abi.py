"""ABI helpers — pure functions, no I/O."""
from __future__ import annotations

from typing import Any, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import (
    function_signature_to_4byte_selector,
    is_address,
    to_checksum_address,
)

from ..errors import InvalidAddress, MalformedResponse


def argument_types(signature: str) -> list[str]:
    """Input types of a canonical signature, e.g. ``allowance(address,address)``."""
    start = signature.index("(")
    inner = signature[start + 1 : -1]
    return [t for t in inner.split(",") if t]


def _checksum(value: Any, signature: str) -> str:
    if not isinstance(value, str) or not is_address(value):
        raise InvalidAddress(f"invalid address {value!r}", call=signature)
    return to_checksum_address(value)


def encode_call(signature: str, *args: Any) -> bytes:
    """Selector plus ABI-encoded arguments for ``signature``."""
    types = argument_types(signature)
    if len(types) != len(args):
        raise ValueError(
            f"{signature} takes {len(types)} argument(s), got {len(args)}"
        )
    selector = function_signature_to_4byte_selector(signature)
    if not types:
        return selector
    values = [
        _checksum(arg, signature) if abi_type == "address" else arg
        for abi_type, arg in zip(types, args)
    ]
    return selector + encode(types, values)


def decode_result(
    output_types: Sequence[str], data: bytes, call: str = ""
) -> tuple[Any, ...]:
    """Decode return data; anything undecodable is a MalformedResponse."""
    if not data:
        raise MalformedResponse("empty return data", call=call or None)
    try:
        return tuple(decode(list(output_types), data))
    except (DecodingError, ValueError) as e:
        raise MalformedResponse(
            f"cannot decode {list(output_types)}: {e}", call=call or None
        ) from e
