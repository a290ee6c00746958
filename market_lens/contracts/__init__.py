"""EVM contract bindings implementing the capability interfaces."""
from .comptroller import ComptrollerContract
from .ctoken import CTokenContract
from .erc20 import Erc20Contract
from .gateway import EvmContractGateway

__all__ = [
    "ComptrollerContract",
    "CTokenContract",
    "Erc20Contract",
    "EvmContractGateway",
]
