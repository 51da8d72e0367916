"""
Tests for direction handling and key bindings.
"""

import pytest

from cube_snake.core.direction import DirectionController, make_direction
from cube_snake.core.input_map import KEY_BINDINGS, resolve_key


@pytest.fixture
def controller():
    return DirectionController((1, 0, 0))


class TestDirectionController:
    """Test reversal protection and last-request-wins behavior."""

    def test_reversal_is_ignored(self, controller):
        """Requesting -X while moving +X is a silent no-op."""
        assert controller.set_direction("x", -1) is False
        assert controller.direction == (1, 0, 0)

    def test_same_direction_is_ignored(self, controller):
        """The active axis rejects both signs."""
        assert controller.set_direction("x", 1) is False
        assert controller.direction == (1, 0, 0)

    @pytest.mark.parametrize("axis,sign,expected", [
        ("y", 1, (0, 1, 0)),
        ("y", -1, (0, -1, 0)),
        ("z", 1, (0, 0, 1)),
        ("z", -1, (0, 0, -1)),
    ])
    def test_perpendicular_is_accepted(self, controller, axis, sign, expected):
        assert controller.set_direction(axis, sign) is True
        assert controller.direction == expected

    def test_last_request_wins(self, controller):
        """Requests are not queued; each accepted one replaces the previous."""
        controller.set_direction("y", 1)
        controller.set_direction("z", -1)

        assert controller.direction == (0, 0, -1)

    def test_two_step_reversal_allowed(self, controller):
        """A perpendicular turn unlocks the original axis before the next tick."""
        controller.set_direction("y", 1)
        assert controller.set_direction("x", -1) is True
        assert controller.direction == (-1, 0, 0)

    def test_single_axis_active(self, controller):
        """Exactly one component is non-zero after any sequence of requests."""
        for axis, sign in [("y", 1), ("x", -1), ("z", 1), ("y", -1), ("x", 1)]:
            controller.set_direction(axis, sign)
            assert sorted(abs(c) for c in controller.direction) == [0, 0, 1]

    def test_active_axis(self, controller):
        assert controller.active_axis == "x"
        controller.set_direction("z", 1)
        assert controller.active_axis == "z"

    def test_reset_restores_initial(self, controller):
        controller.set_direction("y", 1)
        assert controller.reset() == (1, 0, 0)
        assert controller.direction == (1, 0, 0)

    def test_invalid_requests_raise(self, controller):
        with pytest.raises(ValueError):
            controller.set_direction("w", 1)
        with pytest.raises(ValueError):
            controller.set_direction("y", 0)
        with pytest.raises(ValueError):
            DirectionController((1, 1, 0))

    def test_make_direction(self):
        assert make_direction("z", -1) == (0, 0, -1)


class TestKeyBindings:
    """Test the key identifier table."""

    @pytest.mark.parametrize("key,binding", [
        ("w", ("y", 1)),
        ("ArrowUp", ("y", 1)),
        ("s", ("y", -1)),
        ("ArrowDown", ("y", -1)),
        ("a", ("x", -1)),
        ("ArrowLeft", ("x", -1)),
        ("d", ("x", 1)),
        ("ArrowRight", ("x", 1)),
        ("q", ("z", 1)),
        ("e", ("z", -1)),
    ])
    def test_bindings(self, key, binding):
        assert resolve_key(key) == binding

    def test_unbound_keys(self):
        assert resolve_key("x") is None
        assert resolve_key("W") is None
        assert resolve_key("") is None

    def test_table_size(self):
        assert len(KEY_BINDINGS) == 10
