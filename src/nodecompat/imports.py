from __future__ import annotations

from .config import CompatConfig, get_config

COMPAT_IMPORT_SPECIFIER = "flags:compat"


def get_node_imports(
    config: CompatConfig | None = None,
) -> list[tuple[str, list[str]]]:
    """Implicit imports to seed into a module graph when compat mode is on.

    The caller decides whether compat mode is active; this helper only
    describes what to inject. Fresh lists are returned on every call.
    """

    active = config or get_config()
    return [(COMPAT_IMPORT_SPECIFIER, [active.global_url])]
