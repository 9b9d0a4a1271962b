"""Core type definitions for the FormState lifecycle engine.

This module defines the state model every form moves through:
- StateKind: Tag identifying which lifecycle variant is active
- FieldErrorCode: Validation error codes for individual fields
- Unloaded, Loading, Displaying, Editing, Failed: The five state variants
- FormState: Union of the five variants

States are immutable values. Exactly one variant describes a form at any time,
so there are no independently settable flags to get out of sync.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Tuple, TypeVar, Union

if TYPE_CHECKING:
    from formstate.errors import FormError

O = TypeVar("O")


class StateKind(str, Enum):
    """Form lifecycle states.

    A form starts UNLOADED, moves through LOADING or straight to DISPLAYING,
    and alternates between DISPLAYING and EDITING while the user works on it.
    FAILED is reached through a Fail event or a caller hook returning it.
    """
    UNLOADED = "unloaded"
    LOADING = "loading"
    DISPLAYING = "displaying"
    EDITING = "editing"
    FAILED = "failed"


class FieldErrorCode(str, Enum):
    """Validation error codes for individual field failures.

    Attached to FormError by the bundled validators so that callers can
    branch on the failure kind without parsing messages.
    """
    REQUIRED = "required"
    INVALID_TYPE = "invalid_type"
    INVALID_FORMAT = "invalid_format"
    INVALID_VALUE = "invalid_value"
    TOO_LONG = "too_long"
    TOO_SHORT = "too_short"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Unloaded:
    """Initial state: nothing has been requested yet."""

    kind = StateKind.UNLOADED


@dataclass(frozen=True)
class Loading:
    """A request for the form object is in flight."""

    kind = StateKind.LOADING


@dataclass(frozen=True)
class Displaying(Generic[O]):
    """A fully loaded object that is not currently being edited.

    Attributes:
        object: The domain object being shown

    Examples:
        >>> state = Displaying({"name": "Ada"})
        >>> state.kind
        <StateKind.DISPLAYING: 'displaying'>
    """

    object: O

    kind = StateKind.DISPLAYING


@dataclass(frozen=True)
class Editing(Generic[O]):
    """An object under active modification.

    The errors always describe the object held by this same instance: they
    are produced by a failed validation of ``object`` and are dropped as soon
    as the object changes.

    Attributes:
        object: The domain object being edited
        errors: Ordered validation errors, empty when none are outstanding

    Examples:
        >>> from formstate.errors import FormError
        >>> state = Editing({"name": ""}, [FormError("name", "required")])
        >>> len(state.errors)
        1
        >>> state.has_errors
        True
    """

    object: O
    errors: Tuple["FormError", ...] = ()

    kind = StateKind.EDITING

    def __post_init__(self):
        """Store errors as a tuple so the error sequence stays immutable."""
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


@dataclass(frozen=True)
class Failed:
    """An explicit failure. The in-progress object is discarded.

    Attributes:
        message: Human-readable reason for the failure
    """

    message: str

    kind = StateKind.FAILED


FormState = Union[Unloaded, Loading, Displaying[Any], Editing[Any], Failed]
"""Type alias for any of the five lifecycle states."""


__all__ = [
    "StateKind",
    "FieldErrorCode",
    "Unloaded",
    "Loading",
    "Displaying",
    "Editing",
    "Failed",
    "FormState",
]
