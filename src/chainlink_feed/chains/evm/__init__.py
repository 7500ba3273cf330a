"""EVM JSON-RPC client."""
from .client import EvmRpcClient, RpcError

__all__ = ["EvmRpcClient", "RpcError"]
