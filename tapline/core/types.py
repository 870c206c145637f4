# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""Shared type definitions for tapline.

Contains the calling-convention enum (TapType) and the Pydantic models
(Tap, Interceptor, CompileContext, Settings) passed between hooks,
interceptors and compilation strategies.
"""
from collections.abc import Callable
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class TapType(StrEnum):
    """Calling convention a tap was registered under.

    Attributes:
        SYNC: Plain function call; completion is the return.
        ASYNC: Callback style; completion is signaled by invoking a callback.
        PROMISE: Returns an awaitable that resolves on completion.
    """

    SYNC = "sync"
    ASYNC = "async"
    PROMISE = "promise"


class Tap(BaseModel):
    """One registered callback and its ordering constraints.

    This model is frozen. Interceptors that rewrite a tap return a new one,
    usually via model_copy(update={...}). Unknown keyword options are kept
    as extra fields and passed through untouched.

    Attributes:
        name: Identifying name. Not required to be unique.
        type: Calling convention used at registration.
        fn: The registered callback. Never invoked by the hook itself.
        before: Name or names of taps this one must precede.
        stage: Ordering priority; lower stages run earlier.
    """

    model_config = ConfigDict(frozen=True, extra="allow", arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    type: TapType = TapType.SYNC
    fn: Callable[..., Any] | None = None
    before: str | list[str] | None = None
    stage: int = 0

    def options(self) -> dict[str, Any]:
        """Return the tap as a flat dict, extra fields included."""
        return dict(self)

    def registration_options(self) -> dict[str, Any]:
        """Return the options needed to register this tap again.

        ``type`` and ``fn`` are left out so the entry point and callback of
        the new registration apply.
        """
        return {k: v for k, v in self if k not in ("type", "fn")}


class Interceptor(BaseModel):
    """Observer attached to a hook.

    Only ``on_register`` (given as ``register``) is used by the hook. The
    remaining lifecycle slots are carried through to the compilation strategy,
    which decides when to fire them.

    Attributes:
        on_register: Called with each tap; a returned tap (or mapping) replaces
            it, None keeps it. Populated from the ``register`` key; BaseModel
            already defines a ``register`` attribute.
        call: Fired by compiled code when the hook is invoked.
        tap: Fired by compiled code before each tap runs.
        loop: Fired by compiled code on each loop iteration.
        error: Fired by compiled code when a tap fails.
        result: Fired by compiled code with the final result.
        done: Fired by compiled code when the call completes.
        context: Whether the compiled code should pass a shared context object.
    """

    model_config = ConfigDict(
        frozen=True, extra="allow", arbitrary_types_allowed=True, populate_by_name=True
    )

    on_register: Callable[[Tap], Any] | None = Field(default=None, alias="register")
    call: Callable[..., Any] | None = None
    tap: Callable[..., Any] | None = None
    loop: Callable[..., Any] | None = None
    error: Callable[..., Any] | None = None
    result: Callable[..., Any] | None = None
    done: Callable[..., Any] | None = None
    context: bool = False


class CompileContext(BaseModel):
    """Immutable snapshot handed to a compilation strategy.

    Attributes:
        taps: Ordered taps at the time of compilation.
        interceptors: Interceptors in attachment order.
        args: Formal argument names the compiled callable must accept.
        type: Calling convention to compile for.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    taps: tuple[Tap, ...]
    interceptors: tuple[Interceptor, ...]
    args: tuple[str, ...]
    type: TapType


class Settings(BaseModel):
    """Process-wide settings for tapline.

    Attributes:
        log_level: Minimum level for the stderr log handler.
        deprecation_warnings: Emit the one-time legacy ``context`` warning.
    """

    model_config = ConfigDict(frozen=True)

    log_level: LogLevel = "INFO"
    deprecation_warnings: bool = True
