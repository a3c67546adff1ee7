"""Node.js compatibility bridge for an embedded JavaScript runtime.

`nodecompat` maps Node built-in module names onto compat shim URLs, lists the
implicit imports a module graph needs in compat mode, and decides whether an
entry module loads through the ESM or the CommonJS loader. The script engine
is supplied by the caller; see :mod:`nodecompat.engine` for the protocol.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .config import (
    COMPAT_URL_ENV,
    DEFAULT_COMPAT_URL,
    CompatConfig,
    get_config,
    reset_config,
)
from .errors import CompatConfigError, NodeCompatError, ValueExtractionError
from .imports import COMPAT_IMPORT_SPECIFIER, get_node_imports
from .loader import (
    CompatLoader,
    LoaderDecision,
    LoaderMode,
    add_decision_listener,
    detect_loader_mode,
    load_cjs_module,
    observe_decisions,
    remove_decision_listener,
)
from .script import escape_single_quoted
from .specifiers import SUPPORTED_MODULES, NodeEsmResolver, is_builtin, resolve_builtin

__all__ = [
    "COMPAT_IMPORT_SPECIFIER",
    "COMPAT_URL_ENV",
    "DEFAULT_COMPAT_URL",
    "SUPPORTED_MODULES",
    "CompatConfig",
    "CompatConfigError",
    "CompatLoader",
    "LoaderDecision",
    "LoaderMode",
    "NodeCompatError",
    "NodeEsmResolver",
    "ValueExtractionError",
    "add_decision_listener",
    "detect_loader_mode",
    "escape_single_quoted",
    "get_config",
    "get_node_imports",
    "is_builtin",
    "load_cjs_module",
    "observe_decisions",
    "remove_decision_listener",
    "reset_config",
    "resolve_builtin",
]

try:
    __version__ = version("nodecompat")
except PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.0.0"
