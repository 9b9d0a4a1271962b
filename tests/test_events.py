"""Unit tests for event, state and effect values.

Tests cover:
- Event constructors and their kinds
- State variants, kinds and equality
- Effect helpers (batch, flatten, is_none)
- The describe() labelling helper
"""

import pytest

from formstate.effects import NONE, Batch, Callback, NoEffect, batch, flatten, is_none
from formstate.errors import FormError
from formstate.events import (
    Create,
    Display,
    Edit,
    EventKind,
    Fail,
    Perform,
    Request,
    Save,
    describe,
)
from formstate.types import Displaying, Editing, Failed, Loading, StateKind, Unloaded


class TestEvents:
    """Test event constructors."""

    @pytest.mark.parametrize(
        "event,kind",
        [
            (Create(), EventKind.CREATE),
            (Display({}), EventKind.DISPLAY),
            (Edit("name"), EventKind.EDIT),
            (Fail("x"), EventKind.FAIL),
            (Perform(1), EventKind.PERFORM),
            (Request(), EventKind.REQUEST),
            (Save(), EventKind.SAVE),
        ],
    )
    def test_kind(self, event, kind):
        assert event.kind == kind

    def test_events_are_immutable(self):
        event = Fail("x")
        with pytest.raises(AttributeError):
            event.message = "y"

    def test_payloadless_events_compare_equal(self):
        assert Save() == Save()
        assert Save() != Request()


class TestStates:
    """Test state variants."""

    def test_kinds(self):
        assert Unloaded().kind == StateKind.UNLOADED
        assert Loading().kind == StateKind.LOADING
        assert Displaying(1).kind == StateKind.DISPLAYING
        assert Editing(1).kind == StateKind.EDITING
        assert Failed("x").kind == StateKind.FAILED

    def test_editing_defaults_to_no_errors(self):
        state = Editing({"name": "Ada"})
        assert state.errors == ()
        assert state.has_errors is False

    def test_editing_errors_become_tuple(self):
        state = Editing({}, [FormError("name", "required")])
        assert isinstance(state.errors, tuple)
        assert state.has_errors is True

    def test_variants_are_distinct(self):
        assert Unloaded() != Loading()
        assert Displaying({"a": 1}) != Editing({"a": 1})

    def test_states_are_immutable(self):
        state = Displaying({"name": "Ada"})
        with pytest.raises(AttributeError):
            state.object = {}


class TestEffects:
    """Test effect helpers."""

    def test_none_is_no_effect(self):
        assert isinstance(NONE, NoEffect)
        assert is_none(NONE)

    def test_callback_is_not_none(self):
        assert not is_none(Callback(lambda: None))

    def test_batch_of_nothing_is_none(self):
        assert batch() is NONE
        assert batch(NONE, NoEffect()) is NONE

    def test_batch_collapses_single_member(self):
        cb = Callback(lambda: None)
        assert batch(NONE, cb) is cb

    def test_batch_keeps_order(self):
        first = Callback(lambda: 1, description="first")
        second = Callback(lambda: 2, description="second")
        effect = batch(first, NONE, second)
        assert isinstance(effect, Batch)
        assert effect.effects == (first, second)

    def test_batch_of_empty_members_is_none(self):
        assert is_none(Batch([NONE, Batch(())]))

    def test_batch_flattens_nested_batches(self):
        first = Callback(lambda: 1, description="first")
        second = Callback(lambda: 2, description="second")
        third = Callback(lambda: 3, description="third")
        effect = batch(first, batch(second, third))
        assert effect.effects == (first, second, third)

    def test_flatten_nested_leaves_in_order(self):
        first = Callback(lambda: 1, description="first")
        second = Callback(lambda: 2, description="second")
        assert flatten(Batch((Batch((first, NONE)), second))) == (first, second)
        assert flatten(first) == (first,)
        assert flatten(NONE) == ()


class TestDescribe:
    """Test the describe() labelling helper."""

    def test_states_and_events(self):
        assert describe(Loading()) == "loading"
        assert describe(Edit("x")) == "edit"

    def test_other_values(self):
        assert describe(42) == "int"
