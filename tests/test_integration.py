"""Integration tests for complete form lifecycles.

Tests cover end-to-end scenarios combining:
- The transition function and FormConfig hooks
- Validation with both bundled validators
- FormRuntime effect execution and completion events
- Load, edit, fail and recover flows
"""

from formstate import (
    NONE,
    Callback,
    Create,
    Display,
    Edit,
    Fail,
    FormConfig,
    FormError,
    FormRuntime,
    FunctionValidator,
    Perform,
    Request,
    Save,
    SchemaValidator,
    fail_on_bad_transition,
    transition,
)
from formstate.effects import Effect
from formstate.types import Displaying, Editing, Failed, Loading, StateKind, Unloaded
from formstate.validation import ValidObject


class Persist(Effect):
    """Effect describing a save of a validated object."""

    def __init__(self, valid):
        self.valid = valid


class TestNameRequiredScenario:
    """The canonical create, fail validation, fix, save flow."""

    def test_scenario(self):
        """Test create -> save (invalid) -> edit -> save (valid).

        1. Unloaded + Create shows the empty default
        2. Save fails validation and records the name error
        3. Editing the name clears the errors
        4. Save succeeds, stays in Editing and requests persistence
        """
        inputs = {"name": "Ada"}

        def require_name(obj):
            if obj["name"] == "":
                yield FormError("name", "required")

        config = FormConfig(
            default={"name": ""},
            update=lambda obj, field: dict(obj, **{field: inputs[field]}),
            validator=FunctionValidator(require_name),
            save=Persist,
        )

        state, effect = transition(config, Create(), Unloaded())
        assert state == Displaying({"name": ""})
        assert effect is NONE

        state, effect = transition(config, Save(), state)
        assert state == Editing({"name": ""}, [FormError("name", "required")])
        assert effect is NONE

        state, effect = transition(config, Edit("name"), state)
        assert state == Editing({"name": "Ada"}, [])
        assert effect is NONE

        state, effect = transition(config, Save(), state)
        assert state == Editing({"name": "Ada"}, [])
        assert isinstance(effect, Persist)
        assert effect.valid == ValidObject({"name": "Ada"})


class TestRemoteForm:
    """A form backed by a fake remote store, driven through FormRuntime."""

    SCHEMA = {
        "type": "object",
        "properties": {
            "title": {"type": "string", "minLength": 3},
            "pages": {"type": "integer", "minimum": 1},
        },
        "required": ["title", "pages"],
    }

    def make_runtime(self, store, inputs):
        def save(valid):
            def run():
                store["book"] = dict(valid.value, id=1)
                return None
            return Callback(run, description="save book")

        config = FormConfig(
            default={"title": "", "pages": 1},
            update=lambda obj, field: dict(obj, **{field: inputs[field]}),
            validator=SchemaValidator(self.SCHEMA),
            save=save,
            bad_transition=fail_on_bad_transition,
        )
        return FormRuntime(config)

    def test_load_edit_save(self):
        store = {}
        inputs = {"title": "Dune", "pages": 412}
        runtime = self.make_runtime(store, inputs)

        assert runtime.dispatch(Request()) == Loading()
        assert runtime.dispatch(Display({"title": "Du", "pages": 0})) == Displaying({"title": "Du", "pages": 0})

        state = runtime.dispatch(Save())
        assert state.kind == StateKind.EDITING
        assert [e.field for e in state.errors] == ["pages", "title"]
        assert store == {}

        runtime.dispatch(Edit("title"))
        state = runtime.dispatch(Edit("pages"))
        assert state == Editing({"title": "Dune", "pages": 412})

        assert runtime.dispatch(Save()) == Editing({"title": "Dune", "pages": 412})
        assert store == {"book": {"title": "Dune", "pages": 412, "id": 1}}

    def test_unexpected_event_fails_form(self):
        """Should fail the form when configured to treat bad transitions as failures."""
        runtime = self.make_runtime({}, {})
        runtime.dispatch(Request())
        state = runtime.dispatch(Save())
        assert state == Failed("Unexpected event 'save' in state 'loading'")

    def test_fail_then_recover_with_custom_event(self):
        """Should leave Failed only through a caller-defined Perform event."""
        def perform(custom, state):
            if custom == "retry" and isinstance(state, Failed):
                return Unloaded(), Callback(lambda: Request())
            return state, NONE

        config = FormConfig(
            default={},
            update=lambda obj, field: obj,
            validator=FunctionValidator(lambda obj: []),
            save=lambda valid: NONE,
            perform=perform,
        )
        runtime = FormRuntime(config)
        runtime.dispatch(Request())
        assert runtime.dispatch(Fail("timeout")) == Failed("timeout")
        assert runtime.dispatch(Perform("retry")) == Loading()
        assert [t.state.kind.value for t in runtime.history()] == [
            "loading",
            "failed",
            "unloaded",
            "loading",
        ]
