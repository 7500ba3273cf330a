"""Chainlink price aggregator client."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .calls import bounded_call
from .contract import ContractHandle
from .interfaces.chain import ChainClient
from .models import Round

logger = logging.getLogger(__name__)

# Subset of AggregatorV3Interface used by the client
AGGREGATOR_V3_ABI = [
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"internalType": "uint8", "name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "latestRoundData",
        "outputs": [
            {"internalType": "uint80", "name": "roundId", "type": "uint80"},
            {"internalType": "int256", "name": "answer", "type": "int256"},
            {"internalType": "uint256", "name": "startedAt", "type": "uint256"},
            {"internalType": "uint256", "name": "updatedAt", "type": "uint256"},
            {"internalType": "uint80", "name": "answeredInRound", "type": "uint80"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
]


def normalize_answer(raw_answer: int, decimals: int) -> float:
    """Convert a raw fixed-point answer into a float.

    The integer goes through its decimal string rather than ``float(int)``
    so values wider than a float mantissa are rounded once, on parse.
    """
    return float(str(raw_answer)) / (10.0**decimals)


@dataclass(frozen=True)
class ChainlinkContract:
    """One price feed backed by an aggregator contract.

    Use :meth:`create`, which resolves ``decimals`` before returning. The
    decimals are never re-read, so a feed that changes its scale later is
    normalized with the stale value.
    """

    contract: ContractHandle
    identifier: str
    decimals: int
    call_timeout: float

    @classmethod
    async def create(
        cls,
        endpoint: ChainClient,
        identifier: str,
        contract_address: str | bytes,
        call_timeout: float,
    ) -> ChainlinkContract:
        """Bind to the aggregator at ``contract_address`` and read its decimals.

        Args:
            endpoint: Shared chain client; must outlive the returned object.
            identifier: Label copied into every ``Round``.
            contract_address: 20-byte aggregator address (hex or bytes).
            call_timeout: Deadline in seconds for each remote call.

        Raises:
            ValueError: If the address is invalid or the timeout is not positive.
            ContractCallError: If reading ``decimals`` fails.
        """
        if call_timeout <= 0:
            raise ValueError(f"call_timeout must be positive, got {call_timeout}")

        contract = ContractHandle(endpoint, contract_address, AGGREGATOR_V3_ABI)
        (decimals,) = await bounded_call(
            call_timeout, lambda: contract.call("decimals")
        )
        logger.debug("Feed %s at %s uses %d decimals", identifier, contract.address, decimals)

        return cls(
            contract=contract,
            identifier=identifier,
            decimals=int(decimals),
            call_timeout=call_timeout,
        )

    async def latest_round_data(self) -> Round:
        """Fetch the latest round from the aggregator.

        Raises:
            ContractCallError: If the call fails or times out. The client
                stays usable afterwards.
        """
        round_id, raw_answer, started_at, updated_at, answered_in_round = (
            await bounded_call(
                self.call_timeout, lambda: self.contract.call("latestRoundData")
            )
        )

        answer = normalize_answer(raw_answer, self.decimals)
        logger.debug("Feed %s round %d answer %s", self.identifier, round_id, answer)

        return Round(
            identifier=self.identifier,
            round_id=round_id,
            answered_in_round=answered_in_round,
            started_at=started_at,
            updated_at=updated_at,
            answer=answer,
        )
