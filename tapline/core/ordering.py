# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""Ordered insertion of taps by ``before`` and ``stage`` constraints."""

from __future__ import annotations

from collections.abc import Iterable

from tapline.core.types import Tap


def _before_names(before: str | Iterable[str] | None) -> set[str] | None:
    """Normalize a ``before`` constraint to a set of tap names."""
    if before is None:
        return None
    if isinstance(before, str):
        return {before}
    return set(before)


def insert_tap(taps: list[Tap], item: Tap) -> None:
    """Insert a tap into an ordered list in place.

    Scans from the end toward the start. The new tap moves left past every
    tap named in its ``before`` set (and past anything to the right of one
    still pending), then past taps with a strictly greater stage. Equal
    stages keep registration order.

    Names in ``before`` that match no registered tap are ignored. Cyclic
    ``before`` chains are not detected; the scan result stands.

    Args:
        taps: Ordered taps, mutated in place.
        item: The tap to insert.
    """
    before = _before_names(item.before)
    stage = item.stage

    i = len(taps)
    while i > 0:
        x = taps[i - 1]
        if before:
            # Stay left of every pending target, satisfied or not.
            before.discard(x.name)
            i -= 1
            continue
        if x.stage > stage:
            i -= 1
            continue
        break

    taps.insert(i, item)
