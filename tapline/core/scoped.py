# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""Scoped view of a hook with fixed registration options."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from tapline.core.types import Interceptor, Tap


if TYPE_CHECKING:
    from tapline.core.hook import Hook, TapOptions


class ScopedHook:
    """Delegating view returned by ``Hook.with_options``.

    Registrations made through the view get the fixed options merged under
    their own; per-call keys win. Everything else goes straight to the hook.
    """

    def __init__(self, hook: Hook, options: Mapping[str, Any]) -> None:
        self._hook = hook
        self._options = options

    def __repr__(self) -> str:
        return f"ScopedHook(hook={self._hook!r}, options={dict(self._options)!r})"

    @property
    def name(self) -> str | None:
        """Name of the underlying hook."""
        return self._hook.name

    def _merge(self, options: TapOptions) -> TapOptions:
        if isinstance(options, str):
            return {**self._options, "name": options}
        if isinstance(options, Tap):
            return {**self._options, **options.registration_options()}
        if isinstance(options, Mapping):
            return {**self._options, **options}
        # Let the hook reject it with InvalidOptionsError.
        return options

    def tap(self, options: TapOptions, fn: Callable[..., Any] | None) -> None:
        self._hook.tap(self._merge(options), fn)

    def tap_async(self, options: TapOptions, fn: Callable[..., Any] | None) -> None:
        self._hook.tap_async(self._merge(options), fn)

    def tap_promise(self, options: TapOptions, fn: Callable[..., Any] | None) -> None:
        self._hook.tap_promise(self._merge(options), fn)

    def intercept(self, interceptor: Interceptor | Mapping[str, Any]) -> None:
        self._hook.intercept(interceptor)

    def is_used(self) -> bool:
        return self._hook.is_used()

    def with_options(self, options: TapOptions) -> ScopedHook:
        """Return a view combining this view's options with ``options``."""
        return self._hook.with_options(self._merge(options))
