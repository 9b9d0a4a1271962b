"""Event vocabulary for the FormState lifecycle engine.

Events are the only inputs a form reacts to. Each one is an immutable value;
the UI (or an effect's completion) builds one and hands it to
``transition`` / ``FormRuntime.dispatch``.

- Create: start a brand-new object from the configured default
- Display: supply an object to show as-is
- Edit: a field was modified; the configured ``update`` hook resolves the value
- Fail: force the form into the Failed state
- Perform: caller-defined custom event, fully delegated to configuration
- Request: begin loading an object asynchronously
- Save: validate and persist the current object
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Hashable, TypeVar, Union

O = TypeVar("O")
C = TypeVar("C")


class EventKind(str, Enum):
    """Tag identifying which event constructor a value was built with."""
    CREATE = "create"
    DISPLAY = "display"
    EDIT = "edit"
    FAIL = "fail"
    PERFORM = "perform"
    REQUEST = "request"
    SAVE = "save"


@dataclass(frozen=True)
class Create:
    """Start a new object using ``FormConfig.default``."""

    kind = EventKind.CREATE


@dataclass(frozen=True)
class Display(Generic[O]):
    """Show ``object`` as-is, typically the result of a load or save.

    Attributes:
        object: The domain object to display
    """

    object: O

    kind = EventKind.DISPLAY


@dataclass(frozen=True)
class Edit:
    """A single field was modified.

    The event names the field only. ``FormConfig.update`` is responsible for
    producing the new object, reading the new value from wherever the caller
    keeps it. Callers that prefer to carry the value in the event can use a
    ``(field, value)`` tuple as the field identifier.

    Attributes:
        field: Identifier of the edited field

    Examples:
        >>> Edit("name").field
        'name'
        >>> Edit(("name", "Ada")).field
        ('name', 'Ada')
    """

    field: Hashable

    kind = EventKind.EDIT


@dataclass(frozen=True)
class Fail:
    """Force a transition to Failed, discarding any in-progress object.

    Attributes:
        message: Human-readable reason
    """

    message: str

    kind = EventKind.FAIL


@dataclass(frozen=True)
class Perform(Generic[C]):
    """Caller-defined event handled entirely by ``FormConfig.perform``.

    Attributes:
        custom: Opaque payload; the engine never inspects it
    """

    custom: C

    kind = EventKind.PERFORM


@dataclass(frozen=True)
class Request:
    """Begin loading an object; the caller's effect runtime does the fetch."""

    kind = EventKind.REQUEST


@dataclass(frozen=True)
class Save:
    """Validate the current object and, if valid, request persistence."""

    kind = EventKind.SAVE


FormEvent = Union[Create, Display[Any], Edit, Fail, Perform[Any], Request, Save]
"""Type alias for any of the seven event constructors."""


def describe(value: Any) -> str:
    """Short label for an event or state, used in log lines and messages.

    Examples:
        >>> describe(Save())
        'save'
        >>> describe(object())
        'object'
    """
    kind = getattr(value, "kind", None)
    if isinstance(kind, Enum):
        return kind.value
    return type(value).__name__


__all__ = [
    "EventKind",
    "Create",
    "Display",
    "Edit",
    "Fail",
    "Perform",
    "Request",
    "Save",
    "FormEvent",
    "describe",
]
