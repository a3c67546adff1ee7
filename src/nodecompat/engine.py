"""Protocols describing the embedded script engine this package drives.

The engine itself lives outside this package. Anything that implements
:class:`ScriptEngine` can be handed to :class:`nodecompat.loader.CompatLoader`,
which keeps the detection logic testable against fake engines.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Protocol


class ValueScope(Protocol):
    """Scoped access to values owned by the engine."""

    def boolean_value(self, value: Any) -> Any:
        """Read *value* as a boolean.

        Implementations may raise :class:`nodecompat.errors.ValueExtractionError`
        when the value cannot be read at all.
        """


class ScriptEngine(Protocol):
    def execute_script(self, name: str, source: str) -> Any:
        """Run *source* and return an opaque handle to its completion value."""

    async def resolve_value(self, handle: Any) -> Any:
        """Settle *handle*, waiting for any promise it refers to."""

    def handle_scope(self) -> AbstractContextManager[ValueScope]:
        """Open a scope in which resolved values can be inspected."""
