from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any
from unittest import mock

import pytest

from nodecompat import COMPAT_URL_ENV, reset_config


class FakeScope:
    def __init__(self, engine: FakeEngine) -> None:
        self._engine = engine

    def boolean_value(self, value: Any) -> Any:
        if self._engine.read_error is not None:
            raise self._engine.read_error
        return value


class FakeEngine:
    """Records submitted scripts and replays a scripted result."""

    def __init__(
        self,
        result: Any = None,
        *,
        execute_error: BaseException | None = None,
        resolve_error: BaseException | None = None,
        read_error: BaseException | None = None,
    ) -> None:
        self.result = result
        self.execute_error = execute_error
        self.resolve_error = resolve_error
        self.read_error = read_error
        self.scripts: list[tuple[str, str]] = []
        self.resolved: list[Any] = []
        self.scopes_opened = 0
        self.scopes_closed = 0

    def execute_script(self, name: str, source: str) -> Any:
        self.scripts.append((name, source))
        if self.execute_error is not None:
            raise self.execute_error
        return ("handle", len(self.scripts))

    async def resolve_value(self, handle: Any) -> Any:
        self.resolved.append(handle)
        if self.resolve_error is not None:
            raise self.resolve_error
        return self.result

    @contextmanager
    def handle_scope(self) -> Iterator[FakeScope]:
        self.scopes_opened += 1
        try:
            yield FakeScope(self)
        finally:
            self.scopes_closed += 1


@pytest.fixture(autouse=True)
def restore_config() -> Iterator[None]:
    env = {key: value for key, value in os.environ.items() if key != COMPAT_URL_ENV}
    with mock.patch.dict(os.environ, env, clear=True):
        reset_config()
        yield
    reset_config()


@pytest.fixture
def make_engine() -> Callable[..., FakeEngine]:
    return FakeEngine
