"""Async client for Chainlink-style price aggregator contracts."""
from .aggregator import AGGREGATOR_V3_ABI, ChainlinkContract, normalize_answer
from .calls import bounded_call
from .errors import CallTimeoutError, ContractCallError, RemoteError, SchemaError
from .models import Round

__all__ = [
    "AGGREGATOR_V3_ABI",
    "CallTimeoutError",
    "ChainlinkContract",
    "ContractCallError",
    "RemoteError",
    "Round",
    "SchemaError",
    "bounded_call",
    "normalize_answer",
]
