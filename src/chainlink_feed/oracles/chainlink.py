"""Chainlink price oracle service."""
from __future__ import annotations

import asyncio
import logging

from ..aggregator import ChainlinkContract
from ..chains.evm import EvmRpcClient
from ..config import AppConfig, FeedConfig
from ..errors import ContractCallError
from ..interfaces.chain import ChainClient
from ..models import Round

logger = logging.getLogger(__name__)


class ChainlinkOracle:
    """Fetch prices from the configured Chainlink aggregators."""

    def __init__(
        self, config: AppConfig, clients: dict[str, ChainClient] | None = None
    ) -> None:
        self.call_timeout = config.call_timeout
        self.feeds = {f.identifier: f for f in config.feeds}
        if clients is None:
            clients = {
                name: EvmRpcClient(chain_cfg) for name, chain_cfg in config.chains.items()
            }
        self._clients = clients
        # One creation task per feed identifier; failed tasks are dropped
        self._contracts: dict[str, asyncio.Task[ChainlinkContract]] = {}

    async def _contract(self, feed: FeedConfig) -> ChainlinkContract:
        task = self._contracts.get(feed.identifier)
        if task is None:
            task = asyncio.ensure_future(
                ChainlinkContract.create(
                    self._clients[feed.chain],
                    feed.identifier,
                    feed.address,
                    self.call_timeout,
                )
            )
            self._contracts[feed.identifier] = task
        try:
            return await asyncio.shield(task)
        except Exception:
            # Forget the failed creation so the next fetch tries again
            if self._contracts.get(feed.identifier) is task:
                del self._contracts[feed.identifier]
            raise

    async def _fetch_one(self, feed: FeedConfig) -> Round:
        contract = await self._contract(feed)
        return await contract.latest_round_data()

    async def fetch_rounds(self, symbols: list[str] | None = None) -> dict[str, Round]:
        """Fetch the latest round of each requested feed concurrently.

        Feeds that fail are logged and left out of the result.

        Raises:
            KeyError: If a requested symbol is not configured.
        """
        if symbols is None:
            feeds = list(self.feeds.values())
        else:
            feeds = [self.feeds[s] for s in dict.fromkeys(symbols)]

        results = await asyncio.gather(
            *(self._fetch_one(feed) for feed in feeds), return_exceptions=True
        )

        rounds: dict[str, Round] = {}
        for feed, result in zip(feeds, results):
            if isinstance(result, ContractCallError):
                logger.error("Error fetching %s from Chainlink: %s", feed.identifier, result)
                continue
            if isinstance(result, BaseException):
                raise result
            rounds[feed.identifier] = result
        return rounds

    async def fetch_prices(self, symbols: list[str] | None = None) -> dict[str, float]:
        """Fetch current prices from Chainlink.

        Args:
            symbols: Optional list of feed identifiers to fetch. If None,
                     fetches all configured feeds.
        """
        rounds = await self.fetch_rounds(symbols)
        prices = {identifier: r.answer for identifier, r in rounds.items()}

        logger.info("Fetched prices from Chainlink:")
        for asset, price in sorted(prices.items()):
            logger.info("  %s: $%.4f", asset, price)

        return prices
