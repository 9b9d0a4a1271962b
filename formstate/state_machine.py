"""Form transition engine for the FormState lifecycle.

This module implements the state machine every form shares. ``transition``
is a pure function:

    transition(config, event, state) -> (next_state, effect)

It holds no state between calls and never performs the effects it returns.
Rules, in priority order:

- Fail(msg) from any state -> Failed(msg), no effect
- Perform(c) from any state -> whatever ``config.perform(c, state)`` returns
- Unloaded + Create -> Displaying(config.default)
- Unloaded + Request -> Loading
- Unloaded | Loading + Display(o) -> Displaying(o)
- Displaying(o) | Editing(o, _) + Edit(f) -> Editing(config.update(o, f), ())
- Displaying(o) + Save -> Displaying(o) with the save effect when valid,
  Editing(o, errors) otherwise
- Editing(o, _) + Save -> Editing(o, ()) with the save effect when valid,
  Editing(o, errors) otherwise
- anything else -> ``config.bad_transition(event, state)``, returned unmodified

Usage:
    >>> from formstate.events import Create, Save
    >>> from formstate.types import Unloaded
    >>> from formstate.validation import FunctionValidator
    >>> config = FormConfig(
    ...     default={"name": ""},
    ...     update=lambda obj, field: obj,
    ...     validator=FunctionValidator(lambda obj: []),
    ...     save=lambda valid: NONE,
    ... )
    >>> state, effect = transition(config, Create(), Unloaded())
    >>> state
    Displaying(object={'name': ''})
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, Tuple, TypeVar
import logging

from formstate.effects import NONE, Effect
from formstate.events import Create, Display, Edit, Fail, FormEvent, Perform, Request, Save, describe
from formstate.types import Displaying, Editing, Failed, FormState, Loading, Unloaded
from formstate.validation import Ok, Validator

logger = logging.getLogger(__name__)

O = TypeVar("O")

TransitionResult = Tuple[FormState, Effect]
"""Pair returned by ``transition`` and by the perform/bad-transition hooks."""


def ignore_bad_transition(event: Any, state: FormState) -> TransitionResult:
    """Log an unexpected event and keep the current state unchanged."""
    logger.warning(
        "Ignoring event '%s' in state '%s': no transition defined",
        describe(event),
        describe(state),
    )
    return state, NONE


def fail_on_bad_transition(event: Any, state: FormState) -> TransitionResult:
    """Move the form to Failed when an unexpected event arrives.

    Examples:
        >>> fail_on_bad_transition(Save(), Loading())
        (Failed(message="Unexpected event 'save' in state 'loading'"), NoEffect())
    """
    return Failed(f"Unexpected event '{describe(event)}' in state '{describe(state)}'"), NONE


def no_custom_events(custom: Any, state: FormState) -> TransitionResult:
    """Default ``perform`` hook for forms that define no custom events."""
    logger.warning(
        "Ignoring custom event %r in state '%s': no perform hook configured",
        custom,
        describe(state),
    )
    return state, NONE


@dataclass(frozen=True)
class FormConfig(Generic[O]):
    """Caller-supplied hooks that parameterize the form state machine.

    Built once per form type and shared by every instance of that form. It
    owns no mutable state.

    Attributes:
        default: Object used when a new form is created
        update: Pure function ``(object, field) -> object`` applying an edit
        validator: Validation capability, see ``formstate.validation.Validator``
        save: ``(ValidObject) -> Effect`` describing how to persist an object
        perform: ``(custom, state) -> (state, effect)`` for Perform events
        bad_transition: ``(event, state) -> (state, effect)`` fallback for any
            pair without a rule
    """

    default: O
    update: Callable[[O, Hashable], O]
    validator: Validator
    save: Callable[[Any], Effect]
    perform: Callable[[Any, FormState], TransitionResult] = no_custom_events
    bad_transition: Callable[[Any, FormState], TransitionResult] = ignore_bad_transition


def _validate_and_save(config: FormConfig, obj: Any, on_success: FormState) -> TransitionResult:
    """Validate ``obj``; keep ``on_success`` and request a save, or record the errors."""
    result = config.validator.validate(obj)
    if isinstance(result, Ok):
        return on_success, config.save(result.valid)
    return Editing(obj, result.errors), NONE


def transition(config: FormConfig, event: FormEvent, state: FormState) -> TransitionResult:
    """Compute the next state and effect for ``event`` applied to ``state``.

    Defined for every (event, state) pair: pairs with no rule, including
    values that are not FormEvents at all, are handed to
    ``config.bad_transition``.

    Args:
        config: Hooks for this form type
        event: The event being applied
        state: The current state, as returned by the previous call

    Returns:
        Tuple of (next state, effect for the caller to run)
    """
    logger.debug("Applying event '%s' to state '%s'", describe(event), describe(state))

    if isinstance(event, Fail):
        return Failed(event.message), NONE

    if isinstance(event, Perform):
        return config.perform(event.custom, state)

    if isinstance(state, Unloaded):
        if isinstance(event, Create):
            return Displaying(config.default), NONE
        if isinstance(event, Request):
            return Loading(), NONE
        if isinstance(event, Display):
            return Displaying(event.object), NONE

    elif isinstance(state, Loading):
        if isinstance(event, Display):
            return Displaying(event.object), NONE

    elif isinstance(state, Displaying):
        if isinstance(event, Edit):
            return Editing(config.update(state.object, event.field), ()), NONE
        if isinstance(event, Save):
            return _validate_and_save(config, state.object, state)

    elif isinstance(state, Editing):
        if isinstance(event, Edit):
            # Errors describe the last validated object, so a new object starts clean
            return Editing(config.update(state.object, event.field), ()), NONE
        if isinstance(event, Save):
            return _validate_and_save(config, state.object, Editing(state.object, ()))

    return config.bad_transition(event, state)


__all__ = [
    "FormConfig",
    "TransitionResult",
    "transition",
    "ignore_bad_transition",
    "fail_on_bad_transition",
    "no_custom_events",
]
