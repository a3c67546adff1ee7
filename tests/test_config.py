from __future__ import annotations

import os
from unittest import mock

import pytest

from nodecompat import (
    COMPAT_URL_ENV,
    DEFAULT_COMPAT_URL,
    CompatConfig,
    CompatConfigError,
    get_config,
    reset_config,
)


def test_compat_config_defaults() -> None:
    config = CompatConfig()
    assert config.base_url == "https://deno.land/std@0.113.0/"
    assert config.is_default is True
    assert config.global_url == "https://deno.land/std@0.113.0/node/global.ts"
    assert config.module_url == "https://deno.land/std@0.113.0/node/module.ts"


def test_compat_config_from_env_unset() -> None:
    assert CompatConfig.from_env({}).base_url == DEFAULT_COMPAT_URL


def test_empty_override_is_not_replaced_by_default() -> None:
    config = CompatConfig.from_env({COMPAT_URL_ENV: ""})
    assert config.base_url == ""
    assert config.is_default is False
    with pytest.raises(CompatConfigError):
        _ = config.global_url


def test_undecodable_override_is_treated_as_unset() -> None:
    # os.environ maps undecodable bytes to lone surrogates.
    config = CompatConfig.from_env({COMPAT_URL_ENV: "https://example.test/\udcff/"})
    assert config.base_url == DEFAULT_COMPAT_URL


def test_compat_config_from_env_override() -> None:
    with mock.patch.dict(os.environ, {COMPAT_URL_ENV: "https://example.test/std/"}):
        config = CompatConfig.from_env()

    assert config.base_url == "https://example.test/std/"
    assert config.is_default is False
    assert config.global_url == "https://example.test/std/node/global.ts"


def test_compat_config_from_env_is_verbatim() -> None:
    config = CompatConfig.from_env({COMPAT_URL_ENV: "file:///opt/std"})
    assert config.base_url == "file:///opt/std"
    assert config.shim_url("fs") == "file:///opt/stdnode/fs.ts"


def test_malformed_override_fails_on_first_use() -> None:
    config = CompatConfig.from_env({COMPAT_URL_ENV: "not a url/"})
    assert config.base_url == "not a url/"
    with pytest.raises(CompatConfigError):
        _ = config.global_url
    with pytest.raises(CompatConfigError):
        config.shim_url("fs")


@pytest.mark.parametrize(
    "base_url",
    [
        "https://exa mple.test/",
        "https://example.test/std\t/",
        "https://example.test/std\n/",
        "https://example.test/\x00/",
        "https://x.test/a\"+globalThis.pwned+\"/",
        "https://example.test\\std/",
    ],
)
def test_override_with_unsafe_characters_is_rejected(base_url: str) -> None:
    config = CompatConfig(base_url)
    with pytest.raises(CompatConfigError, match="forbidden character"):
        _ = config.module_url
    with pytest.raises(CompatConfigError):
        config.shim_url("fs")


def test_get_config_is_computed_once() -> None:
    with mock.patch.dict(os.environ, {COMPAT_URL_ENV: "https://one.test/"}):
        first = get_config()
    with mock.patch.dict(os.environ, {COMPAT_URL_ENV: "https://two.test/"}):
        second = get_config()

    assert first is second
    assert second.base_url == "https://one.test/"


def test_reset_config_rereads_environment() -> None:
    assert get_config().base_url == DEFAULT_COMPAT_URL
    with mock.patch.dict(os.environ, {COMPAT_URL_ENV: "https://two.test/"}):
        reset_config()
        assert get_config().base_url == "https://two.test/"
