# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""Tests for interceptor attachment and the register chain."""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

from tapline.core.types import Interceptor, Tap
from tests.conftest import SeriesHook, tap_names


def _rename(suffix: str) -> Callable[[Tap], Tap]:
    def register(tap: Tap) -> Tap:
        return tap.model_copy(update={"name": tap.name + suffix})
    return register


class TestRetroactiveRegister:
    """Attaching an interceptor rewrites existing taps."""

    def test_existing_taps_are_rewritten_in_place(
        self, hook: SeriesHook, noop: Callable[..., None]
    ) -> None:
        hook.tap("A", noop)
        hook.tap({"name": "B", "stage": -1}, noop)

        hook.intercept({"register": _rename("!")})

        assert tap_names(hook) == ["B!", "A!"]

    def test_each_existing_tap_is_seen_once_in_order(
        self, hook: SeriesHook, noop: Callable[..., None]
    ) -> None:
        hook.tap("A", noop)
        hook.tap("B", noop)
        hook.tap("C", noop)
        register = MagicMock(return_value=None)

        hook.intercept({"register": register})

        assert [call.args[0].name for call in register.call_args_list] == ["A", "B", "C"]

    def test_none_return_leaves_tap_unchanged(self, hook: SeriesHook, noop: Callable[..., None]) -> None:
        hook.tap("A", noop)
        original = hook.taps[0]

        hook.intercept({"register": lambda tap: None})

        assert hook.taps[0] is original

    def test_mapping_return_is_validated_into_tap(
        self, hook: SeriesHook, noop: Callable[..., None]
    ) -> None:
        hook.tap("A", noop)

        hook.intercept({"register": lambda tap: {**tap.options(), "plugin": "audit"}})

        assert isinstance(hook.taps[0], Tap)
        assert hook.taps[0].options()["plugin"] == "audit"

    def test_interceptor_without_register_does_not_touch_taps(
        self, hook: SeriesHook, noop: Callable[..., None]
    ) -> None:
        hook.tap("A", noop)
        original = list(hook.taps)

        hook.intercept({"call": MagicMock()})

        assert hook.taps == original

    def test_retroactive_rewrite_does_not_reorder(
        self, hook: SeriesHook, noop: Callable[..., None]
    ) -> None:
        hook.tap({"name": "A", "stage": 0}, noop)
        hook.tap({"name": "B", "stage": 1}, noop)

        hook.intercept({"register": lambda tap: tap.model_copy(update={"stage": -tap.stage})})

        assert tap_names(hook) == ["A", "B"]
        assert [tap.stage for tap in hook.taps] == [0, -1]


class TestRegisterChain:
    """Interceptors rewrite taps registered after attachment."""

    def test_new_tap_passes_through_every_interceptor_in_order(
        self, hook: SeriesHook, noop: Callable[..., None]
    ) -> None:
        hook.intercept({"register": _rename("1")})
        hook.intercept({"register": _rename("2")})

        hook.tap("A", noop)

        assert tap_names(hook) == ["A12"]

    def test_none_return_carries_previous_value(
        self, hook: SeriesHook, noop: Callable[..., None]
    ) -> None:
        hook.intercept({"register": _rename("1")})
        hook.intercept({"register": lambda tap: None})
        hook.intercept({"register": _rename("3")})

        hook.tap("A", noop)

        assert tap_names(hook) == ["A13"]

    def test_each_tap_registered_later_is_seen_once(
        self, hook: SeriesHook, noop: Callable[..., None]
    ) -> None:
        register = MagicMock(side_effect=lambda tap: tap)
        hook.tap("early", noop)
        hook.intercept({"register": register})

        hook.tap("late1", noop)
        hook.tap("late2", noop)

        seen = [call.args[0].name for call in register.call_args_list]
        assert seen == ["early", "late1", "late2"]

    def test_interceptor_can_change_stage_before_insertion(
        self, hook: SeriesHook, noop: Callable[..., None]
    ) -> None:
        hook.tap("A", noop)
        hook.intercept(
            {"register": lambda tap: tap.model_copy(update={"stage": -5}) if tap.name == "Z" else None}
        )

        hook.tap("Z", noop)

        assert tap_names(hook) == ["Z", "A"]

    def test_interceptor_sees_extra_metadata(self, hook: SeriesHook, noop: Callable[..., None]) -> None:
        seen: list[Any] = []
        hook.intercept({"register": lambda tap: seen.append(tap.options().get("plugin"))})

        hook.tap({"name": "A", "plugin": "metrics"}, noop)

        assert seen == ["metrics"]


class TestInterceptorStorage:
    """Interceptors are stored as copies in attachment order."""

    def test_mapping_becomes_interceptor(self, hook: SeriesHook) -> None:
        done = MagicMock()
        hook.intercept({"done": done, "context": True, "name": "timer"})

        stored = hook.interceptors[0]
        assert isinstance(stored, Interceptor)
        assert stored.done is done
        assert stored.context is True
        assert stored.model_extra == {"name": "timer"}

    def test_model_is_copied(self, hook: SeriesHook) -> None:
        interceptor = Interceptor(call=MagicMock())

        hook.intercept(interceptor)

        assert hook.interceptors[0] == interceptor
        assert hook.interceptors[0] is not interceptor

    def test_mapping_is_copied(self, hook: SeriesHook) -> None:
        definition: dict[str, Any] = {"call": MagicMock()}
        hook.intercept(definition)
        definition["register"] = MagicMock()

        assert hook.interceptors[0].on_register is None

    def test_attachment_order_is_kept(self, hook: SeriesHook) -> None:
        first, second = MagicMock(), MagicMock()
        hook.intercept({"call": first})
        hook.intercept({"call": second})

        assert [i.call for i in hook.interceptors] == [first, second]

    def test_register_key_populates_on_register(self, hook: SeriesHook) -> None:
        register = MagicMock(return_value=None)

        hook.intercept(Interceptor(register=register))
        hook.intercept({"register": register})
        hook.intercept({"on_register": register})

        assert [i.on_register for i in hook.interceptors] == [register] * 3
        assert all(i.model_extra == {} for i in hook.interceptors)

    def test_register_field_does_not_shadow_base_model(self) -> None:
        assert "register" not in Interceptor.model_fields
        assert Interceptor.model_fields["on_register"].alias == "register"
