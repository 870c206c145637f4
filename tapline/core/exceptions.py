# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""Custom exceptions for tapline."""


class TaplineError(Exception):
    """Base exception for all tapline errors."""

    pass


class InvalidOptionsError(TaplineError, TypeError):
    """Raised when tap options are neither a string nor a mapping."""

    def __init__(self, options: object) -> None:
        self.options = options
        super().__init__(
            f"Invalid tap options: expected str or mapping, got {type(options).__name__}"
        )


class MissingNameError(TaplineError, ValueError):
    """Raised when tap options do not carry a non-empty string name."""

    def __init__(self, message: str = "Missing name for tap") -> None:
        super().__init__(message)


class AbstractMethodError(TaplineError, NotImplementedError):
    """Raised when a hook is invoked without a compilation strategy.

    Attributes:
        hook_name: Name of the hook that could not compile (if known).
    """

    def __init__(self, hook_name: str | None = None) -> None:
        """Initialize AbstractMethodError.

        Args:
            hook_name: Name of the hook that was invoked (optional).
        """
        self.hook_name = hook_name

        if hook_name:
            message = f"Abstract: compile() of hook {hook_name!r} should be overridden"
        else:
            message = "Abstract: compile() should be overridden"

        super().__init__(message)
