"""Mapping from Node built-in module names to compat shim locations."""

from __future__ import annotations

from .config import CompatConfig, get_config

NODE_SCHEME = "node:"

SUPPORTED_MODULES: tuple[str, ...] = (
    "assert",
    "assert/strict",
    "async_hooks",
    "buffer",
    "child_process",
    "cluster",
    "console",
    "constants",
    "crypto",
    "dgram",
    "dns",
    "domain",
    "events",
    "fs",
    "fs/promises",
    "http",
    "https",
    "module",
    "net",
    "os",
    "path",
    "path/posix",
    "path/win32",
    "perf_hooks",
    "process",
    "querystring",
    "readline",
    "stream",
    "stream/promises",
    "stream/web",
    "string_decoder",
    "sys",
    "timers",
    "timers/promises",
    "tls",
    "tty",
    "url",
    "util",
    "util/types",
    "v8",
    "vm",
    "zlib",
)

_SUPPORTED = frozenset(SUPPORTED_MODULES)


def is_builtin(name: str) -> bool:
    """Return ``True`` when *name* is exactly one of :data:`SUPPORTED_MODULES`.

    >>> is_builtin("fs/promises")
    True
    >>> is_builtin("FS")
    False
    """

    return name in _SUPPORTED


def resolve_builtin(name: str, config: CompatConfig | None = None) -> str | None:
    """Return the shim URL for a built-in module name, or ``None``.

    ``None`` is not an error: it tells the caller to resolve *name* through the
    regular module resolution path.

    >>> resolve_builtin("http", CompatConfig("https://example.test/std/"))
    'https://example.test/std/node/http.ts'
    >>> resolve_builtin("not-a-module") is None
    True
    """

    if name not in _SUPPORTED:
        return None
    active = config or get_config()
    return active.shim_url(name)


class NodeEsmResolver:
    """Resolve ESM import specifiers that name Node built-ins.

    Both the bare form (``"fs"``) and the scheme form (``"node:fs"``) are
    recognised. Anything else resolves to ``None`` and is left to the module
    graph's own resolver.
    """

    def __init__(self, config: CompatConfig | None = None) -> None:
        self._config = config

    @property
    def config(self) -> CompatConfig:
        return self._config or get_config()

    def resolve(self, specifier: str) -> str | None:
        name = specifier
        if name.startswith(NODE_SCHEME):
            name = name[len(NODE_SCHEME) :]
        return resolve_builtin(name, self.config)
