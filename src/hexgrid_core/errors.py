from __future__ import annotations


class HexGridError(ValueError):
    """Base class for grid errors. Subclasses ValueError so callers can catch either."""


class DomainError(HexGridError):
    """An argument is outside the domain of the operation (resolution, k, coordinates)."""


class InvalidIndexError(DomainError):
    """An operation was attempted on a structurally invalid cell index."""


class UnsupportedTopologyError(HexGridError):
    """A traversal step would need to resolve more than one pentagon distortion."""


class ParseError(HexGridError):
    """A cell index string could not be parsed."""
