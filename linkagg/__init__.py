"""Wire protocol, integrity framing, sequence numbers and identifiers for link aggregation."""

__version__ = "0.1.0"

__all__ = [
    "codec",
    "errors",
    "framing",
    "ids",
    "messages",
    "peekable",
    "seq",
    "thread_bound",
]