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

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    rpc_url: str = ""
    rpc_timeout: int = 30


@dataclass(frozen=True)
class FeedConfig:
    identifier: str = ""
    chain: str = ""
    address: str = ""


@dataclass(frozen=True)
class AppConfig:
    chains: dict[str, ChainConfig] = field(default_factory=dict)
    feeds: tuple[FeedConfig, ...] = ()
    call_timeout: float = 10.0


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


def _build_chains(raw: dict[str, Any]) -> dict[str, ChainConfig]:
    if not isinstance(raw, dict):
        raise ValueError("'chains' must be a mapping of chain name to settings")
    chains: dict[str, ChainConfig] = {}
    for name, cfg in raw.items():
        if not isinstance(cfg, dict):
            raise ValueError(f"Chain '{name}' must be a mapping")
        chains[name] = ChainConfig(
            rpc_url=cfg.get("rpc_url", ""),
            rpc_timeout=int(cfg.get("rpc_timeout", 30)),
        )
    return chains


def _build_feeds(raw: list[dict[str, Any]]) -> tuple[FeedConfig, ...]:
    if not isinstance(raw, list):
        raise ValueError("'feeds' must be a list")
    for f in raw:
        if not isinstance(f, dict):
            raise ValueError(f"Feed entry must be a mapping, got {f!r}")
    return tuple(
        FeedConfig(
            identifier=str(f.get("identifier", "")),
            chain=f.get("chain", ""),
            address=f.get("address", ""),
        )
        for f in raw
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            current working directory.
    """
    load_dotenv()

    if config_path is None:
        config_path = Path.cwd() / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        chains=_build_chains(raw.get("chains") or {}),
        feeds=_build_feeds(raw.get("feeds") or []),
        call_timeout=float(raw.get("call_timeout", 10.0)),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if cfg.call_timeout <= 0:
        raise ValueError("call_timeout must be positive")

    for name, chain in cfg.chains.items():
        if not chain.rpc_url:
            raise ValueError(f"Chain '{name}' has no rpc_url")

    if not cfg.feeds:
        raise ValueError("At least one feed must be configured")

    seen: set[str] = set()
    for feed in cfg.feeds:
        if not feed.identifier:
            raise ValueError("Every feed needs an identifier")
        if feed.identifier in seen:
            raise ValueError(f"Duplicate feed identifier '{feed.identifier}'")
        seen.add(feed.identifier)
        if not feed.address:
            raise ValueError(f"Feed '{feed.identifier}' has no address")
        if not is_address(feed.address):
            raise ValueError(
                f"Feed '{feed.identifier}' has invalid address '{feed.address}'"
            )
        if feed.chain not in cfg.chains:
            raise ValueError(
                f"Feed '{feed.identifier}' references unknown chain '{feed.chain}'"
            )
