# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""Compilation strategy protocol.

A compilation strategy turns a snapshot of taps, interceptors and argument
names into a callable for one calling convention. Hook flavors (series,
parallel, waterfall, bail) are strategies; tapline ships none of them.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from tapline.core.types import CompileContext


@runtime_checkable
class CompilationStrategy(Protocol):
    """Protocol for turning a hook snapshot into an executable callable.

    The returned callable must accept the hook's declared arguments, plus
    a trailing completion callback for ``TapType.ASYNC``. For
    ``TapType.PROMISE`` it must return an awaitable.
    """

    def compile(self, context: CompileContext) -> Callable[..., Any]:
        """Build the dispatch callable for a snapshot.

        Args:
            context: Taps, interceptors, argument names and calling convention.

        Returns:
            Callable invoking every tap under the requested convention.
        """
        ...
