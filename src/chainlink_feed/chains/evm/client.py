"""EVM JSON-RPC client over HTTP."""
import itertools
import logging
import ssl
from typing import Any

import aiohttp
import certifi
from eth_utils import decode_hex, to_hex

from ...config import ChainConfig

logger = logging.getLogger(__name__)


class RpcError(RuntimeError):
    """Raised when the node rejects a request or the HTTP exchange fails."""


class EvmRpcClient:
    """EVM node client for read-only JSON-RPC calls.

    Each request is a single attempt against a single endpoint; retries and
    fallback are left to the caller.
    """

    def __init__(self, config: ChainConfig) -> None:
        self.rpc_url = config.rpc_url
        self.timeout = config.rpc_timeout
        self._ids = itertools.count(1)

    async def rpc_call(self, method: str, params: list[Any]) -> Any:
        """Make a JSON-RPC call and return its ``result`` member."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        logger.debug("RPC %s -> %s", method, self.rpc_url)
        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.post(
                self.rpc_url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status != 200:
                    raise RpcError(f"HTTP {response.status} from {self.rpc_url}")

                result = await response.json()
                if "error" in result:
                    raise RpcError(f"RPC Error: {result['error']}")
                if "result" not in result:
                    raise RpcError(f"Malformed RPC response: {result}")

                return result["result"]

    async def eth_call(self, to: str, data: bytes, block: str = "latest") -> bytes:
        """Execute a read-only message call against ``to``."""
        result = await self.rpc_call("eth_call", [{"to": to, "data": to_hex(data)}, block])
        return decode_hex(result)

