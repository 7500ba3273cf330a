"""Unit tests for deadline-bounded calls and error classification."""
from __future__ import annotations

import asyncio
import time

import pytest

from chainlink_feed.calls import bounded_call
from chainlink_feed.errors import (
    CallTimeoutError,
    ContractCallError,
    RemoteError,
    SchemaError,
)


async def _hang() -> None:
    await asyncio.Event().wait()


class TestBoundedCall:
    @pytest.mark.asyncio
    async def test_returns_value(self) -> None:
        async def op() -> int:
            return 7

        assert await bounded_call(1.0, op) == 7

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        with pytest.raises(CallTimeoutError) as exc_info:
            await bounded_call(0.01, _hang)
        assert exc_info.value.timeout == 0.01

    @pytest.mark.asyncio
    async def test_timeout_is_prompt(self) -> None:
        start = time.monotonic()
        with pytest.raises(CallTimeoutError):
            await bounded_call(0.001, _hang)
        assert time.monotonic() - start < 0.5

    @pytest.mark.asyncio
    async def test_transport_timeout_is_timeout(self) -> None:
        cause = asyncio.TimeoutError()

        async def op() -> None:
            raise cause

        with pytest.raises(CallTimeoutError) as exc_info:
            await bounded_call(5.0, op)
        assert exc_info.value.__cause__ is cause
        assert "call deadline 5.0s" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_failure_becomes_remote(self) -> None:
        cause = ConnectionError("connection reset")

        async def op() -> None:
            raise cause

        with pytest.raises(RemoteError) as exc_info:
            await bounded_call(1.0, op)
        assert exc_info.value.detail is cause
        assert exc_info.value.__cause__ is cause

    @pytest.mark.asyncio
    async def test_schema_error_passes_through(self) -> None:
        async def op() -> None:
            raise SchemaError("no such function")

        with pytest.raises(SchemaError, match="no such function"):
            await bounded_call(1.0, op)

    @pytest.mark.asyncio
    async def test_remote_error_not_rewrapped(self) -> None:
        async def op() -> None:
            raise RemoteError("bad return data")

        with pytest.raises(RemoteError) as exc_info:
            await bounded_call(1.0, op)
        assert exc_info.value.detail == "bad return data"

    @pytest.mark.asyncio
    async def test_operation_called_once(self) -> None:
        calls = 0

        async def op() -> None:
            nonlocal calls
            calls += 1
            raise RuntimeError("boom")

        with pytest.raises(RemoteError):
            await bounded_call(1.0, op)
        assert calls == 1


class TestErrorTaxonomy:
    @pytest.mark.parametrize(
        "error",
        [SchemaError("x"), CallTimeoutError(1.0), RemoteError("x")],
    )
    def test_all_kinds_share_base(self, error: Exception) -> None:
        assert isinstance(error, ContractCallError)

    def test_messages(self) -> None:
        assert "1.5s" in str(CallTimeoutError(1.5))
        assert "node down" in str(RemoteError("node down"))
