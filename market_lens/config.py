"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from eth_utils import is_address

from .models import NATIVE_DECIMALS

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    rpc_endpoints: tuple[str, ...] = ()
    rpc_timeout: int = 30


@dataclass(frozen=True)
class LensConfig:
    # Symbols that mark the native-asset market. The metadata and balance
    # readers each match against their own marker.
    metadata_native_marker: str = "fETH"
    balance_native_marker: str = "fETH"
    native_decimals: int = NATIVE_DECIMALS
    max_concurrency: int = 8


@dataclass(frozen=True)
class DeploymentConfig:
    registry: str = ""
    instruments: tuple[str, ...] = ()


@dataclass(frozen=True)
class AppConfig:
    chain: ChainConfig = field(default_factory=ChainConfig)
    lens: LensConfig = field(default_factory=LensConfig)
    deployment: DeploymentConfig = field(default_factory=DeploymentConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    return ChainConfig(
        rpc_endpoints=tuple(raw.get("rpc_endpoints", [])),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
    )


def _build_lens(raw: dict[str, Any]) -> LensConfig:
    return LensConfig(
        metadata_native_marker=str(
            raw.get("metadata_native_marker", LensConfig.metadata_native_marker)
        ),
        balance_native_marker=str(
            raw.get("balance_native_marker", LensConfig.balance_native_marker)
        ),
        native_decimals=int(raw.get("native_decimals", NATIVE_DECIMALS)),
        max_concurrency=int(raw.get("max_concurrency", 8)),
    )


def _build_deployment(raw: dict[str, Any]) -> DeploymentConfig:
    return DeploymentConfig(
        registry=raw.get("registry") or "",
        instruments=tuple(raw.get("instruments", [])),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        chain=_build_chain(raw.get("chain", {})),
        lens=_build_lens(raw.get("lens", {})),
        deployment=_build_deployment(raw.get("deployment", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.chain.rpc_endpoints:
        raise ValueError("At least one RPC endpoint must be configured")
    if cfg.chain.rpc_timeout <= 0:
        raise ValueError("rpc_timeout must be positive")

    lens = cfg.lens
    if not lens.metadata_native_marker or not lens.balance_native_marker:
        raise ValueError("Native market markers must not be empty")
    if lens.max_concurrency < 1:
        raise ValueError("max_concurrency must be at least 1")
    if lens.native_decimals < 0:
        raise ValueError("native_decimals must not be negative")
    if lens.metadata_native_marker != lens.balance_native_marker:
        logger.warning(
            "Native markers differ: metadata=%r balance=%r",
            lens.metadata_native_marker,
            lens.balance_native_marker,
        )

    if cfg.deployment.registry and not is_address(cfg.deployment.registry):
        raise ValueError(f"Invalid registry address '{cfg.deployment.registry}'")
    for instrument in cfg.deployment.instruments:
        if not is_address(instrument):
            raise ValueError(f"Invalid instrument address '{instrument}'")
