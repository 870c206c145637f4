# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""Ordered, interceptable extension points with lazily compiled dispatch.

A Hook collects named taps registered by independent components and invokes
them through a compilation strategy supplied by a hook flavor. tapline owns
registration, ordering, interception and caching of the compiled callable;
flavors decide how taps actually run.

Calling Conventions:
    - call: plain synchronous call
    - call_async: callback style, last argument is the completion callback
    - promise: returns an awaitable

Example:
    >>> from tapline import Hook
    >>> class SeriesHook(Hook):
    ...     def compile(self, context):
    ...         fns = [tap.fn for tap in context.taps]
    ...         return lambda *args: [fn(*args) for fn in fns]
    >>> hook = SeriesHook(["value"])
    >>> hook.tap("double", lambda value: value * 2)
    >>> hook.tap({"name": "first", "stage": -1}, lambda value: value)
    >>> hook.call(21)
    [21, 42]
"""

from tapline.config import apply_settings, load_settings
from tapline.core.exceptions import (
    AbstractMethodError,
    InvalidOptionsError,
    MissingNameError,
    TaplineError,
)
from tapline.core.hook import Hook
from tapline.core.ordering import insert_tap
from tapline.core.protocols import CompilationStrategy
from tapline.core.scoped import ScopedHook
from tapline.core.types import CompileContext, Interceptor, Settings, Tap, TapType
from tapline.logging import configure_logging


__version__ = "0.1.0"

__all__ = [
    # Hooks
    "Hook",
    "ScopedHook",
    "CompilationStrategy",
    "insert_tap",
    # Models
    "Tap",
    "TapType",
    "Interceptor",
    "CompileContext",
    "Settings",
    # Configuration
    "load_settings",
    "apply_settings",
    "configure_logging",
    # Exceptions
    "TaplineError",
    "InvalidOptionsError",
    "MissingNameError",
    "AbstractMethodError",
]
