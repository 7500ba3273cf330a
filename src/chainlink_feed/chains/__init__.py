"""Chain client implementations."""
from .evm import EvmRpcClient, RpcError

__all__ = ["EvmRpcClient", "RpcError"]
