# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""Shared fixtures and helpers for all tests.

Provides a recording compilation strategy and hook factories. The strategy
runs taps in series for each calling convention so tests can observe both
ordering and compilation counts.
"""
import inspect
from collections.abc import Callable, Generator
from typing import Any

import pytest

from tapline.core.deprecation import reset_deprecation_state
from tapline.core.hook import Hook
from tapline.core.types import CompileContext, TapType


class SeriesStrategy:
    """Compilation strategy that runs taps in order and counts compilations.

    - sync: returns the list of tap results.
    - async: calls the trailing callback with (None, results) or (error, None).
    - promise: returns a coroutine resolving to the list of results.
    """

    def __init__(self) -> None:
        self.contexts: list[CompileContext] = []

    @property
    def compile_count(self) -> int:
        return len(self.contexts)

    def compile(self, context: CompileContext) -> Callable[..., Any]:
        self.contexts.append(context)
        fns = [tap.fn for tap in context.taps]

        if context.type == TapType.SYNC:
            def run_sync(*args: Any) -> list[Any]:
                return [fn(*args) for fn in fns]

            return run_sync

        if context.type == TapType.ASYNC:
            def run_async(*args: Any) -> None:
                *call_args, callback = args
                try:
                    results = [fn(*call_args) for fn in fns]
                except Exception as e:
                    callback(e, None)
                    return
                callback(None, results)

            return run_async

        async def run_promise(*args: Any) -> list[Any]:
            results = []
            for fn in fns:
                result = fn(*args)
                if inspect.isawaitable(result):
                    result = await result
                results.append(result)
            return results

        return run_promise


class SeriesHook(Hook):
    """Hook flavor overriding compile with a SeriesStrategy."""

    def __init__(self, args: list[str] | None = None, name: str | None = None) -> None:
        super().__init__(args or [], name)
        self.strategy = SeriesStrategy()

    def compile(self, context: CompileContext) -> Callable[..., Any]:
        return self.strategy.compile(context)


def tap_names(hook: Hook) -> list[str]:
    """Return the names of a hook's taps in dispatch order."""
    return [tap.name for tap in hook.taps]


@pytest.fixture(autouse=True)
def _reset_deprecation() -> Generator[None, None, None]:
    """Give every test a fresh one-time deprecation warning."""
    reset_deprecation_state()
    yield
    reset_deprecation_state()


@pytest.fixture
def series_strategy() -> SeriesStrategy:
    """Create a fresh SeriesStrategy."""
    return SeriesStrategy()


@pytest.fixture
def hook_factory() -> Callable[..., SeriesHook]:
    """Factory fixture for creating SeriesHook instances."""
    def _create(args: list[str] | None = None, name: str | None = "test") -> SeriesHook:
        return SeriesHook(args, name)
    return _create


@pytest.fixture
def hook(hook_factory: Callable[..., SeriesHook]) -> SeriesHook:
    """Create a SeriesHook taking a single ``value`` argument."""
    return hook_factory(["value"])


@pytest.fixture
def noop() -> Callable[..., None]:
    """A tap callback that does nothing."""
    def _noop(*args: Any) -> None:
        return None
    return _noop
