from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from threading import Lock
from urllib.parse import urlsplit

from .errors import CompatConfigError

# Bumped by hand for each release so the shims match a known std version.
DEFAULT_COMPAT_URL = "https://deno.land/std@0.113.0/"
COMPAT_URL_ENV = "DENO_NODE_COMPAT_URL"

_LOGGER = logging.getLogger("nodecompat.config")
_CONFIG: CompatConfig | None = None
_LOCK = Lock()
_FORBIDDEN_URL_CHARS = frozenset("\"\\")


@dataclass(frozen=True, slots=True)
class CompatConfig:
    """Location settings for the Node compatibility shims.

    ``base_url`` is joined to shim paths by plain concatenation, so overrides
    are expected to end with ``/``. Derived URLs are validated when read, which
    means a malformed override fails at its first use rather than here.
    """

    base_url: str = DEFAULT_COMPAT_URL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CompatConfig:
        """Load the base location from ``DENO_NODE_COMPAT_URL``.

        An unset variable, or one whose bytes are not valid UTF-8, selects
        :data:`DEFAULT_COMPAT_URL`. Any other value, the empty string included,
        is used verbatim and checked when a derived URL is first read.
        """

        env = os.environ if environ is None else environ
        override = env.get(COMPAT_URL_ENV)
        if override is None or not _is_utf8(override):
            return cls()
        return cls(base_url=override)

    @property
    def is_default(self) -> bool:
        return self.base_url == DEFAULT_COMPAT_URL

    @property
    def global_url(self) -> str:
        """Location of the shim that installs Node globals."""

        return self.shim_url("global")

    @property
    def module_url(self) -> str:
        """Location of the shim exposing Node's ``module`` loader."""

        return self.shim_url("module")

    def shim_url(self, name: str) -> str:
        return _checked_url(f"{self.base_url}node/{name}.ts")


def _is_utf8(value: str) -> bool:
    # os.environ surrogate-escapes undecodable bytes.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _is_forbidden(char: str) -> bool:
    # URLs are embedded in double-quoted script literals without escaping.
    return char in _FORBIDDEN_URL_CHARS or char.isspace() or not char.isprintable()


def _checked_url(url: str) -> str:
    bad = next((char for char in url if _is_forbidden(char)), None)
    if bad is not None:
        raise CompatConfigError(
            f"invalid compat URL {url!r}: forbidden character {bad!r} "
            f"(check {COMPAT_URL_ENV})"
        )
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise CompatConfigError(f"invalid compat URL {url!r}: {exc}") from exc
    if not parts.scheme or not (parts.netloc or parts.path):
        raise CompatConfigError(
            f"invalid compat URL {url!r}: expected an absolute URL "
            f"(check {COMPAT_URL_ENV})"
        )
    return url


def get_config() -> CompatConfig:
    """Return the process-wide configuration, reading the environment once."""

    global _CONFIG
    with _LOCK:
        if _CONFIG is None:
            _CONFIG = CompatConfig.from_env()
            _LOGGER.debug(
                "compat base url=%s default=%s",
                _CONFIG.base_url,
                _CONFIG.is_default,
            )
        return _CONFIG


def reset_config() -> None:
    """Forget the cached configuration so the next read consults the environment."""

    global _CONFIG
    with _LOCK:
        _CONFIG = None
