"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from chainlink_feed.config import AppConfig, ChainConfig, FeedConfig
from tests.fakes import BTC_FEED, ETH_FEED, FakeChainClient


@pytest.fixture()
def chain() -> FakeChainClient:
    return FakeChainClient()


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(rpc_url="https://rpc.example.com", rpc_timeout=5)


@pytest.fixture()
def sample_app_config(sample_chain_config: ChainConfig) -> AppConfig:
    return AppConfig(
        chains={"ethereum": sample_chain_config},
        feeds=(
            FeedConfig(identifier="ETH", chain="ethereum", address=ETH_FEED),
            FeedConfig(identifier="BTC", chain="ethereum", address=BTC_FEED),
        ),
        call_timeout=2.0,
    )


SAMPLE_YAML = textwrap.dedent(f"""\
    call_timeout: 5
    chains:
      ethereum:
        rpc_url: "https://rpc.example.com"
        rpc_timeout: 10
    feeds:
      - identifier: ETH
        chain: ethereum
        address: "{ETH_FEED}"
      - identifier: BTC
        chain: ethereum
        address: "{BTC_FEED}"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
