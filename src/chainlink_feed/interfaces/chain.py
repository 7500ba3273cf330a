"""Chain client protocol — read-only EVM call abstraction."""
from typing import Protocol


class ChainClient(Protocol):
    """Abstract interface for read-only contract calls on an EVM chain."""

    async def eth_call(self, to: str, data: bytes, block: str = "latest") -> bytes: ...
