"""Custom exception types used across :mod:`kheap`."""

from __future__ import annotations


class KHeapError(Exception):
    """Base class for all package-specific errors."""


class InvalidArgumentError(KHeapError, ValueError):
    """Raised when a heap is configured with invalid parameters (e.g. ``k < 2``)."""


class OutOfRangeError(KHeapError, IndexError):
    """Raised when a heap slot or vertex index lies outside the valid range."""


class EmptyHeapError(KHeapError, IndexError):
    """Raised by ``peek_min``/``extract_min`` on an empty heap."""


class InputError(KHeapError, ValueError):
    """Raised for invalid user input such as out-of-range vertices."""


class GraphFormatError(InputError):
    """Raised when parsing a graph file fails."""


class UsageError(InputError):
    """Raised for malformed command-line arguments."""


class AlgorithmError(KHeapError, RuntimeError):
    """Raised when heap invariants are found violated at runtime."""


__all__ = [
    "KHeapError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "EmptyHeapError",
    "InputError",
    "GraphFormatError",
    "UsageError",
    "AlgorithmError",
]
