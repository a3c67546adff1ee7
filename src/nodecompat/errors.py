from __future__ import annotations


class NodeCompatError(Exception):
    """Base class for failures raised by the compatibility layer."""


class CompatConfigError(NodeCompatError, ValueError):
    """The configured compat base location is not a usable absolute URL."""


class ValueExtractionError(NodeCompatError, TypeError):
    """An engine scope could not read a boolean out of a resolved value."""
