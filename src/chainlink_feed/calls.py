"""Deadline-bounded remote calls."""
from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .errors import CallTimeoutError, ContractCallError, RemoteError

T = TypeVar("T")


async def bounded_call(deadline: float, operation: Callable[[], Awaitable[T]]) -> T:
    """Await ``operation()`` for at most ``deadline`` seconds.

    Exactly one attempt is made. Failures are classified into the
    ``ContractCallError`` kinds: a ``SchemaError`` raised by the operation
    before dispatch passes through unchanged, an elapsed deadline becomes
    ``CallTimeoutError`` and anything else raised by the transport or the
    contract becomes ``RemoteError``.

    On timeout the awaited task is cancelled, but a request already sent to
    the node is not recalled.

    A transport that gives up on its own timeout first is reported the same
    way, as ``CallTimeoutError``.
    """
    try:
        return await asyncio.wait_for(operation(), timeout=deadline)
    except asyncio.TimeoutError as e:
        raise CallTimeoutError(deadline) from e
    except ContractCallError:
        raise
    except Exception as e:
        raise RemoteError(e) from e
