"""Price oracle implementations."""
from .chainlink import ChainlinkOracle

__all__ = ["ChainlinkOracle"]
