"""Error types raised while parsing chain data and talking to a node."""

from __future__ import annotations

from dataclasses import dataclass


class ParseError(Exception):
    """Raised when serialized chain data cannot be decoded."""

    def __init__(self, detail: str, kind: str = "IO Error") -> None:
        super().__init__(detail)
        self.detail = detail
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind}: {self.detail}"


class InvalidDataError(ParseError):
    """Raised when data is structurally invalid or truncated."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail, kind="Invalid Data Error")


@dataclass(frozen=True)
class GrpcStatus:
    """A gRPC status code with a message."""

    code: int
    message: str

    INTERNAL = 13

    @classmethod
    def internal(cls, message: str) -> GrpcStatus:
        return cls(cls.INTERNAL, message)


class JsonRpcConnectorError(Exception):
    """Raised by the JSON-RPC client."""

    _PREFIXES = {
        "client": "Error: ",
        "serde": "Error: Serialization/Deserialization Error: ",
        "http": "Error: HTTP Request Error: ",
        "uri": "Error: Invalid URI: ",
        "url": "Error: Invalid URL:",
    }

    def __init__(self, message: str, kind: str = "client") -> None:
        if kind not in self._PREFIXES:
            raise ValueError(f"unknown connector error kind: {kind!r}")
        super().__init__(message)
        self.message = message
        self.kind = kind

    def __str__(self) -> str:
        return f"{self._PREFIXES[self.kind]}{self.message}"

    def to_grpc_status(self) -> GrpcStatus:
        """Convert into an internal gRPC status carrying this error's text."""
        return GrpcStatus.internal(f"Error: JsonRPC Client Error: {self}")


class BlockCacheError(Exception):
    """Raised when fetching or building a block fails."""

    def __init__(self, source: ParseError | JsonRpcConnectorError) -> None:
        super().__init__(source)
        self.source = source

    def __str__(self) -> str:
        if isinstance(self.source, ParseError):
            return f"Parser Error: {self.source}"
        return f"JsonRPC Connector Error: {self.source}"


class MempoolError(Exception):
    """Raised when updating the mempool fails."""

    def __init__(self, source: JsonRpcConnectorError) -> None:
        super().__init__(source)
        self.source = source

    def __str__(self) -> str:
        return f"JsonRPC Connector Error: {self.source}"