"""Protocol interfaces for the Chainlink feed client."""
from .chain import ChainClient

__all__ = ["ChainClient"]
