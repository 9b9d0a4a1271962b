"""Error types for the FormState lifecycle engine.

Two kinds of error live here and they are never conflated:

- FormError is a *value*: a field-level validation failure that the
  validation capability produces and the Editing state carries. A form
  holding FormErrors is still usable; the user fixes the fields and saves again.
- FormStateError and its subclasses are *exceptions* raised by the optional
  runtime helpers. The transition function itself never raises on its own
  account; unexpected (event, state) pairs go to the configured
  bad-transition handler instead.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional

from formstate.types import FieldErrorCode


@dataclass(frozen=True)
class FormError:
    """Per-field validation error details.

    Attributes:
        field: Identifier of the field that failed (any hashable value,
            typically a string such as "name" or "contact.email")
        message: Human-readable error description
        code: Optional machine-readable error code

    Examples:
        >>> err = FormError(field="name", message="required")
        >>> err.field
        'name'
        >>> err.to_dict()
        {'field': 'name', 'message': 'required'}
    """
    field: Hashable
    message: str
    code: Optional[FieldErrorCode] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "field": self.field,
            "message": self.message,
        }
        if self.code is not None:
            result["code"] = self.code.value if isinstance(self.code, FieldErrorCode) else self.code
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormError":
        """Create FormError from dict."""
        code = data.get("code")
        if isinstance(code, str):
            code = FieldErrorCode(code)
        return cls(
            field=data["field"],
            message=data["message"],
            code=code,
        )


class FormStateError(Exception):
    """Base class for exceptions raised by the formstate runtime helpers."""


class UnsupportedEffectError(FormStateError):
    """Raised when an executor is handed an effect type it cannot run.

    Attributes:
        effect: The effect that could not be executed
    """

    def __init__(self, effect: Any):
        self.effect = effect
        super().__init__(
            f"No executor available for effect of type '{type(effect).__name__}'. "
            f"Pass a custom executor to FormRuntime to run caller-defined effects."
        )


__all__ = [
    "FormError",
    "FormStateError",
    "UnsupportedEffectError",
]
