"""Contract handle — ABI encoding and decoding around ``eth_call``."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eth_abi import decode, encode
from eth_abi.exceptions import (
    ABITypeError,
    DecodingError,
    EncodingError,
    ParseError,
    PredicateMappingError,
)
from eth_utils import function_signature_to_4byte_selector, to_checksum_address
from eth_utils.abi import collapse_if_tuple

from .errors import RemoteError, SchemaError
from .interfaces.chain import ChainClient

# eth-abi also raises plain ValueError for some unusable type strings
_ABI_ERRORS = (
    ABITypeError,
    EncodingError,
    ParseError,
    PredicateMappingError,
    ValueError,
    TypeError,
)


@dataclass(frozen=True)
class ContractFunction:
    """A single function entry parsed from an ABI."""

    name: str
    input_types: tuple[str, ...]
    output_types: tuple[str, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)


def parse_abi(abi: list[dict[str, Any]]) -> dict[str, ContractFunction]:
    """Build a name -> function mapping from a JSON ABI.

    Raises:
        SchemaError: If the ABI is not a list of well-formed entries.
    """
    if not isinstance(abi, list):
        raise SchemaError(f"ABI must be a list of entries, got {type(abi).__name__}")

    functions: dict[str, ContractFunction] = {}
    for entry in abi:
        if not isinstance(entry, dict):
            raise SchemaError(f"Malformed ABI entry: {entry!r}")
        if entry.get("type", "function") != "function":
            continue
        try:
            fn = ContractFunction(
                name=entry["name"],
                input_types=tuple(collapse_if_tuple(p) for p in entry.get("inputs", [])),
                output_types=tuple(collapse_if_tuple(p) for p in entry.get("outputs", [])),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise SchemaError(f"Malformed ABI entry {entry!r}: {e}") from e
        functions[fn.name] = fn
    return functions


class ContractHandle:
    """A deployed contract bound to an endpoint and an ABI.

    The endpoint is shared, not owned: it must outlive the handle.
    """

    def __init__(
        self, endpoint: ChainClient, address: str | bytes, abi: list[dict[str, Any]]
    ) -> None:
        # to_checksum_address raises ValueError on anything that is not 20 bytes
        self.address = to_checksum_address(address)
        self.endpoint = endpoint
        self.functions = parse_abi(abi)

    def encode_call(self, name: str, *args: Any) -> bytes:
        """Encode calldata for ``name(*args)``.

        Raises:
            SchemaError: If the function is unknown or the arguments do not
                match its inputs.
        """
        fn = self.functions.get(name)
        if fn is None:
            raise SchemaError(f"Function '{name}' not found in contract ABI")
        if len(args) != len(fn.input_types):
            raise SchemaError(
                f"Function '{name}' expects {len(fn.input_types)} arguments, "
                f"got {len(args)}"
            )
        try:
            return fn.selector + encode(list(fn.input_types), list(args))
        except _ABI_ERRORS as e:
            raise SchemaError(f"Cannot encode call to '{fn.signature}': {e}") from e

    def decode_output(self, name: str, data: bytes) -> tuple[Any, ...]:
        """Decode the return data of ``name``.

        Raises:
            SchemaError: If the ABI output types are invalid.
            RemoteError: If the returned bytes do not match the output types,
                e.g. when the address holds no contract.
        """
        fn = self.functions[name]
        try:
            return tuple(decode(list(fn.output_types), data))
        except DecodingError as e:
            raise RemoteError(
                f"Unexpected return data from '{fn.signature}' at {self.address}: {e}"
            ) from e
        except _ABI_ERRORS as e:
            raise SchemaError(f"Cannot decode output of '{fn.signature}': {e}") from e

    async def call(self, name: str, *args: Any) -> tuple[Any, ...]:
        """Run a read-only call and return the decoded outputs.

        Encoding happens before anything is sent, so schema problems never
        reach the endpoint.
        """
        calldata = self.encode_call(name, *args)
        raw = await self.endpoint.eth_call(self.address, calldata)
        return self.decode_output(name, raw)
