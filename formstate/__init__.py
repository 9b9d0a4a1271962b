"""FormState: a lifecycle state machine for editable, validatable forms.

FormState gives every form in an application the same behavior around
loading, editing, validating, saving and error reporting:
- Five lifecycle states (Unloaded, Loading, Displaying, Editing, Failed)
- Seven events (Create, Display, Edit, Fail, Perform, Request, Save)
- A pure transition function that returns effects instead of running them
- A caller-supplied configuration holding all form-specific logic
- An optional runtime that serializes dispatch and executes effects

Basic usage:
    >>> from formstate import FormConfig, FunctionValidator, transition
    >>> from formstate import Create, Unloaded, NONE
    >>> config = FormConfig(
    ...     default={"name": ""},
    ...     update=lambda obj, field: obj,
    ...     validator=FunctionValidator(lambda obj: []),
    ...     save=lambda valid: NONE,
    ... )
    >>> state, effect = transition(config, Create(), Unloaded())
    >>> print(state.kind.value)
    displaying
"""

__version__ = "0.1.0"
__author__ = "FormState Team"

# Version info
VERSION = (0, 1, 0)

# Core exports
from formstate.effects import NONE, Batch, Callback, Effect, NoEffect, batch, flatten
from formstate.errors import FormError, FormStateError, UnsupportedEffectError
from formstate.events import Create, Display, Edit, Fail, FormEvent, Perform, Request, Save
from formstate.runtime import FormRuntime, run_effect
from formstate.state_machine import (
    FormConfig,
    fail_on_bad_transition,
    ignore_bad_transition,
    transition,
)
from formstate.types import Displaying, Editing, Failed, FormState, Loading, StateKind, Unloaded
from formstate.validation import Err, FunctionValidator, Ok, SchemaValidator, ValidObject, Validator

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "transition",
    "FormConfig",
    "ignore_bad_transition",
    "fail_on_bad_transition",
    "FormRuntime",
    "run_effect",
    "FormState",
    "StateKind",
    "Unloaded",
    "Loading",
    "Displaying",
    "Editing",
    "Failed",
    "FormEvent",
    "Create",
    "Display",
    "Edit",
    "Fail",
    "Perform",
    "Request",
    "Save",
    "Effect",
    "NoEffect",
    "NONE",
    "Callback",
    "Batch",
    "batch",
    "flatten",
    "FormError",
    "FormStateError",
    "UnsupportedEffectError",
    "Validator",
    "ValidObject",
    "Ok",
    "Err",
    "FunctionValidator",
    "SchemaValidator",
]
