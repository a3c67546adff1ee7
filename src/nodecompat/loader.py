from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .config import CompatConfig, get_config
from .engine import ScriptEngine
from .errors import ValueExtractionError
from .script import render_cjs_load, render_esm_check

_ESM_CHECK_SCRIPT_NAME = "[nodecompat:loader.detect_loader_mode]"
_CJS_LOAD_SCRIPT_NAME = "[nodecompat:loader.load_cjs_module]"

_LISTENERS: list[Callable[[LoaderDecision], None]] = []


class LoaderMode(str, Enum):
    ESM = "esm"
    CJS = "cjs"


@dataclass(slots=True)
class LoaderDecision:
    entry_path: str
    mode: LoaderMode
    value: Any
    reason: str

    def as_dict(self) -> dict[str, Any]:
        """Represent the decision as plain data for logging or testing."""

        return {
            "entry_path": self.entry_path,
            "mode": self.mode.value,
            "value": self.value,
            "reason": self.reason,
        }


class CompatLoader:
    """Decides how an entry module loads and starts CommonJS loading.

    The engine must already be initialised: globals installed and the compat
    ``module`` shim importable. Engine failures are never retried or wrapped.
    """

    def __init__(
        self, engine: ScriptEngine, *, config: CompatConfig | None = None
    ) -> None:
        self._engine = engine
        self._config = config or get_config()

    @property
    def config(self) -> CompatConfig:
        return self._config

    async def detect_loader_mode(self, entry_path: str) -> LoaderMode:
        """Ask the compat ``module`` shim whether *entry_path* is ESM.

        Only a resolved value that reads as exactly ``True`` selects ESM;
        ``False``, ``undefined`` and any other value select CJS.
        """

        source = render_esm_check(self._config.module_url, entry_path)
        handle = self._engine.execute_script(_ESM_CHECK_SCRIPT_NAME, source)
        resolved = await self._engine.resolve_value(handle)
        with self._engine.handle_scope() as scope:
            try:
                value = scope.boolean_value(resolved)
            except ValueExtractionError as exc:
                decision = LoaderDecision(
                    entry_path=entry_path,
                    mode=LoaderMode.CJS,
                    value=None,
                    reason=f"value could not be read as boolean: {exc}",
                )
            else:
                decision = _decision_for_value(entry_path, value)

        _notify_listeners(decision)
        return decision.mode

    def load_cjs_module(self, entry_path: str) -> None:
        """Submit the CommonJS load of *entry_path* as the main module.

        Returns once the script is submitted; completion of the load belongs
        to the engine's own event loop.
        """

        source = render_cjs_load(self._config.module_url, entry_path)
        self._engine.execute_script(_CJS_LOAD_SCRIPT_NAME, source)

    async def prepare_main(self, entry_path: str) -> LoaderMode:
        """Detect the loader mode and start CommonJS loading when selected.

        For ESM the entry is left for the module graph loader.
        """

        mode = await self.detect_loader_mode(entry_path)
        if mode is LoaderMode.CJS:
            self.load_cjs_module(entry_path)
        return mode


async def detect_loader_mode(
    engine: ScriptEngine,
    entry_path: str,
    *,
    config: CompatConfig | None = None,
) -> LoaderMode:
    """Delegate to :meth:`CompatLoader.detect_loader_mode`."""

    return await CompatLoader(engine, config=config).detect_loader_mode(entry_path)


def load_cjs_module(
    engine: ScriptEngine,
    entry_path: str,
    *,
    config: CompatConfig | None = None,
) -> None:
    """Delegate to :meth:`CompatLoader.load_cjs_module`."""

    CompatLoader(engine, config=config).load_cjs_module(entry_path)


def add_decision_listener(listener: Callable[[LoaderDecision], None]) -> None:
    """Register a callback invoked after every loader-mode detection."""

    _LISTENERS.append(listener)


def remove_decision_listener(listener: Callable[[LoaderDecision], None]) -> None:
    """Remove a previously registered decision listener."""

    try:
        _LISTENERS.remove(listener)
    except ValueError:
        pass


def _notify_listeners(decision: LoaderDecision) -> None:
    for listener in list(_LISTENERS):
        listener(decision)


@contextmanager
def observe_decisions(
    *,
    logger: logging.Logger | None = None,
    level: int = logging.INFO,
) -> Iterator[None]:
    """Context manager that logs loader-mode decisions during its scope."""

    active_logger = logger or logging.getLogger("nodecompat.loader")

    def _listener(decision: LoaderDecision) -> None:
        active_logger.log(
            level,
            "loader mode=%s entry=%s reason=%s",
            decision.mode.value,
            decision.entry_path,
            decision.reason,
        )

    add_decision_listener(_listener)
    try:
        yield
    finally:
        remove_decision_listener(_listener)


def _decision_for_value(entry_path: str, value: Any) -> LoaderDecision:
    if value is True:
        return LoaderDecision(
            entry_path, LoaderMode.ESM, value, "shouldUseESMLoader returned true"
        )
    if value is False:
        return LoaderDecision(
            entry_path, LoaderMode.CJS, value, "shouldUseESMLoader returned false"
        )
    return LoaderDecision(
        entry_path,
        LoaderMode.CJS,
        value,
        f"non-boolean value {type(value).__name__} treated as CJS",
    )
