"""Parsing of Zcash full blocks and transactions into compact blocks."""

__version__ = "0.1.0"
__all__ = ["block", "compact", "components", "encoding", "errors", "transaction"]