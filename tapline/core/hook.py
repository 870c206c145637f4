# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""Hook: ordered tap registry with lazily compiled dispatch.

A hook owns an ordered list of taps and a list of interceptors. Invoking it
through ``call``, ``call_async`` or ``promise`` asks the compilation
strategy for a callable on first use, caches it per calling convention, and
forwards to the cached callable until the next registration.

Usage:
    class SeriesHook(Hook):
        def compile(self, context):
            fns = [tap.fn for tap in context.taps]
            def run(*args):
                for fn in fns:
                    fn(*args)
            return run

    hook = SeriesHook(["compilation"], name="emit")
    hook.tap("MyPlugin", on_emit)
    hook.call(compilation)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, TypeAlias

from loguru import logger

from tapline.core.deprecation import warn_context_deprecated
from tapline.core.exceptions import (
    AbstractMethodError,
    InvalidOptionsError,
    MissingNameError,
)
from tapline.core.ordering import insert_tap
from tapline.core.scoped import ScopedHook
from tapline.core.types import CompileContext, Interceptor, Tap, TapType


if TYPE_CHECKING:
    from tapline.core.protocols import CompilationStrategy


TapOptions: TypeAlias = str | Mapping[str, Any] | Tap


def _coerce_tap(value: Tap | Mapping[str, Any]) -> Tap:
    """Accept a tap returned by an interceptor as a model or a mapping."""
    if isinstance(value, Tap):
        return value
    return Tap.model_validate(dict(value))


def _normalize_options(options: TapOptions) -> dict[str, Any]:
    """Turn caller-supplied tap options into a fresh dict.

    Raises:
        InvalidOptionsError: If options is not a string, mapping or Tap.
        MissingNameError: If the name is missing, empty or not a string.
    """
    if isinstance(options, str):
        normalized: dict[str, Any] = {"name": options.strip()}
    elif isinstance(options, Tap):
        normalized = options.registration_options()
    elif isinstance(options, Mapping):
        normalized = dict(options)
    else:
        raise InvalidOptionsError(options)

    name = normalized.get("name")
    if not isinstance(name, str) or name == "":
        raise MissingNameError()
    return normalized


class Hook:
    """Extension point that dispatches to every registered tap.

    Subclasses implement ``compile``; alternatively a ``CompilationStrategy``
    can be passed as ``compiler``. Without either, invoking the hook raises
    AbstractMethodError.

    Thread-safety: none. Registration during an in-flight call is allowed
    and takes effect on the next call.

    Attributes:
        name: Optional name used in diagnostics.
        taps: Registered taps in dispatch order.
        interceptors: Attached interceptors in attachment order.
    """

    def __init__(
        self,
        args: Iterable[str] = (),
        name: str | None = None,
        compiler: CompilationStrategy | None = None,
    ) -> None:
        """Initialize the hook.

        Args:
            args: Formal argument names the compiled callable accepts.
            name: Optional hook name.
            compiler: Optional strategy used by the default ``compile``.
        """
        self._args: tuple[str, ...] = tuple(args)
        self.name = name
        self.taps: list[Tap] = []
        self.interceptors: list[Interceptor] = []
        self._compiler = compiler
        self._compiled: dict[TapType, Callable[..., Any] | None] = dict.fromkeys(TapType)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, taps={len(self.taps)})"

    @property
    def args(self) -> tuple[str, ...]:
        """Formal argument names, fixed at construction."""
        return self._args

    # Compilation

    def compile(self, context: CompileContext) -> Callable[..., Any]:
        """Build the dispatch callable for one calling convention.

        Args:
            context: Snapshot of taps, interceptors, args and convention.

        Returns:
            Callable that runs the taps.

        Raises:
            AbstractMethodError: If neither overridden nor given a compiler.
        """
        if self._compiler is None:
            raise AbstractMethodError(self.name)
        return self._compiler.compile(context)

    def _create_call(self, type: TapType) -> Callable[..., Any]:
        context = CompileContext(
            taps=tuple(self.taps),
            interceptors=tuple(self.interceptors),
            args=self._args,
            type=type,
        )
        logger.debug(
            "Compiling hook {hook} for {type}",
            hook=self.name,
            type=type.value,
            taps=len(context.taps),
            interceptors=len(context.interceptors),
        )
        return self.compile(context)

    def _dispatch(self, type: TapType, args: tuple[Any, ...]) -> Any:
        fn = self._compiled[type]
        if fn is None:
            fn = self._create_call(type)
            self._compiled[type] = fn
        return fn(*args)

    def _reset_compilation(self) -> None:
        self._compiled = dict.fromkeys(TapType)

    # Invocation

    def call(self, *args: Any) -> Any:
        """Invoke all taps synchronously."""
        return self._dispatch(TapType.SYNC, args)

    def call_async(self, *args: Any) -> Any:
        """Invoke all taps; the last argument is the completion callback."""
        return self._dispatch(TapType.ASYNC, args)

    def promise(self, *args: Any) -> Any:
        """Invoke all taps and return the strategy's awaitable."""
        return self._dispatch(TapType.PROMISE, args)

    # Registration

    def _tap(self, type: TapType, options: TapOptions, fn: Callable[..., Any] | None) -> None:
        normalized = _normalize_options(options)
        if "context" in normalized:
            warn_context_deprecated()

        tap = Tap.model_validate({"type": type, "fn": fn, **normalized})
        tap = self._run_register_interceptors(tap)
        self._insert(tap)

        logger.debug(
            "Registered tap {tap} on hook {hook}",
            tap=tap.name,
            hook=self.name,
            type=tap.type.value,
            stage=tap.stage,
        )

    def tap(self, options: TapOptions, fn: Callable[..., Any] | None) -> None:
        """Register a synchronous tap.

        Args:
            options: Tap name, or a mapping with ``name`` and optional
                ``before``, ``stage`` and extra metadata.
            fn: Callback to register.

        Raises:
            InvalidOptionsError: If options is not a string or mapping.
            MissingNameError: If no usable name is given.
        """
        self._tap(TapType.SYNC, options, fn)

    def tap_async(self, options: TapOptions, fn: Callable[..., Any] | None) -> None:
        """Register a callback-style asynchronous tap."""
        self._tap(TapType.ASYNC, options, fn)

    def tap_promise(self, options: TapOptions, fn: Callable[..., Any] | None) -> None:
        """Register a tap that returns an awaitable."""
        self._tap(TapType.PROMISE, options, fn)

    def _run_register_interceptors(self, tap: Tap) -> Tap:
        for interceptor in self.interceptors:
            if interceptor.on_register is not None:
                new_tap = interceptor.on_register(tap)
                if new_tap is not None:
                    tap = _coerce_tap(new_tap)
        return tap

    def _insert(self, tap: Tap) -> None:
        self._reset_compilation()
        insert_tap(self.taps, tap)

    # Interception

    def intercept(self, interceptor: Interceptor | Mapping[str, Any]) -> None:
        """Attach an interceptor.

        A copy of the interceptor is stored. If it has ``register``, every
        already registered tap is passed through it in place.

        Args:
            interceptor: Interceptor model or mapping of its slots.
        """
        self._reset_compilation()
        if isinstance(interceptor, Interceptor):
            interceptor = interceptor.model_copy()
        else:
            interceptor = Interceptor.model_validate(dict(interceptor))
        self.interceptors.append(interceptor)

        if interceptor.on_register is not None:
            for i, tap in enumerate(self.taps):
                new_tap = interceptor.on_register(tap)
                if new_tap is not None:
                    self.taps[i] = _coerce_tap(new_tap)

        logger.debug(
            "Attached interceptor to hook {hook}",
            hook=self.name,
            interceptors=len(self.interceptors),
        )

    # Introspection

    def is_used(self) -> bool:
        """Return True if any tap or interceptor is registered."""
        return len(self.taps) > 0 or len(self.interceptors) > 0

    def with_options(self, options: Mapping[str, Any]) -> ScopedHook:
        """Return a view whose registrations inherit ``options``.

        Args:
            options: Defaults merged under every registration's own options.

        Returns:
            ScopedHook bound to this hook.
        """
        return ScopedHook(self, options)
