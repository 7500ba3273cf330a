"""Errors raised by contract calls.

Every fallible contract operation raises exactly one of the three
``ContractCallError`` kinds below.
"""
from __future__ import annotations

from typing import Any


class ContractCallError(Exception):
    """Base exception for all contract call failures."""


class SchemaError(ContractCallError):
    """Raised when a call cannot be encoded against the contract ABI.

    Nothing is sent to the endpoint when this is raised.
    """


class CallTimeoutError(ContractCallError):
    """Raised when a remote call does not finish within its deadline.

    The caller stopped waiting; the request may still complete on the node.
    """

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Contract call timed out (call deadline {timeout}s)")
        self.timeout = timeout


class RemoteError(ContractCallError):
    """Raised when the transport or the contract execution fails."""

    def __init__(self, detail: Any) -> None:
        super().__init__(f"Contract call failed: {detail}")
        self.detail = detail
