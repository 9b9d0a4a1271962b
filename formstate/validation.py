"""Validation capability for the FormState lifecycle engine.

The transition function treats validation as an opaque capability:

    validate(object) -> Ok(ValidObject) | Err(errors)

Anything with a ``validate`` method of that shape satisfies the Validator
protocol. Two implementations are bundled:

- FunctionValidator adapts a plain function returning FormErrors
- SchemaValidator validates dict-shaped objects against a JSON Schema and
  translates jsonschema errors into FormErrors with specific codes

``FormConfig.save`` only ever receives a ValidObject, so the persistence hook
cannot be handed an object that skipped validation.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterable, Tuple, TypeVar, Union

import jsonschema
from jsonschema import Draft7Validator
from typing_extensions import Protocol, runtime_checkable

from formstate.errors import FormError
from formstate.types import FieldErrorCode

O = TypeVar("O")


@dataclass(frozen=True)
class ValidObject(Generic[O]):
    """An object that has passed validation.

    Only validators build these. Holding one is the proof that ``value`` was
    accepted by the validator it came from.

    Attributes:
        value: The validated object
    """
    value: O


@dataclass(frozen=True)
class Ok(Generic[O]):
    """Successful validation result.

    Attributes:
        valid: The validated wrapper to hand to ``FormConfig.save``
    """
    valid: ValidObject[O]

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed validation result.

    Attributes:
        errors: Ordered field errors; never empty for a real failure
    """
    errors: Tuple[FormError, ...]

    def __post_init__(self):
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))

    @property
    def is_ok(self) -> bool:
        return False


ValidationResult = Union[Ok[Any], Err]
"""Type alias for the outcome of ``Validator.validate``."""


@runtime_checkable
class Validator(Protocol):
    """Anything that can validate a form object.

    Implementations must be deterministic and free of side effects.
    """

    def validate(self, obj: Any) -> ValidationResult:
        ...


class FunctionValidator:
    """Adapt a function returning field errors into a Validator.

    The wrapped function receives the object and returns an iterable of
    FormError. An empty iterable means the object is valid.

    Examples:
        >>> def check(obj):
        ...     if not obj.get("name"):
        ...         yield FormError("name", "required")
        >>> validator = FunctionValidator(check)
        >>> validator.validate({"name": "Ada"}).is_ok
        True
        >>> validator.validate({"name": ""}).errors
        (FormError(field='name', message='required', code=None),)
    """

    def __init__(self, check: Callable[[Any], Iterable[FormError]]) -> None:
        self.check = check

    def validate(self, obj: Any) -> ValidationResult:
        errors = tuple(self.check(obj))
        if errors:
            return Err(errors)
        return Ok(ValidObject(obj))


class SchemaValidator:
    """JSON Schema validator for dict-shaped form objects.

    Wraps the jsonschema library and translates its errors into FormErrors
    whose ``field`` is the dot-notation path of the offending property.

    Attributes:
        schema: The JSON Schema definition to validate against
        validator: The underlying jsonschema validator instance

    Examples:
        >>> schema = {
        ...     'type': 'object',
        ...     'properties': {'name': {'type': 'string', 'minLength': 1}},
        ...     'required': ['name']
        ... }
        >>> validator = SchemaValidator(schema)
        >>> validator.validate({'name': 'Ada'}).is_ok
        True
        >>> validator.validate({}).errors[0].code
        <FieldErrorCode.REQUIRED: 'required'>
    """

    def __init__(self, schema: Dict[str, Any]) -> None:
        """Initialize the validator with a JSON Schema.

        Args:
            schema: A JSON Schema definition (Draft 7 or compatible)

        Raises:
            jsonschema.SchemaError: If the provided schema is invalid
        """
        self.schema = schema
        Draft7Validator.check_schema(schema)
        self.validator = Draft7Validator(schema)

    def validate(self, obj: Any) -> ValidationResult:
        """Validate a form object against the schema.

        Errors are ordered by their path in the object so that the same
        object always yields the same sequence.
        """
        errors = sorted(self.validator.iter_errors(obj), key=lambda e: [str(p) for p in e.path])
        if not errors:
            return Ok(ValidObject(obj))
        return Err(tuple(self._translate_error(error) for error in errors))

    def _translate_error(self, error: jsonschema.ValidationError) -> FormError:
        """Translate a jsonschema ValidationError to a FormError.

        Error mapping:
            - 'required' property errors -> REQUIRED
            - 'type' errors -> INVALID_TYPE
            - 'format' and 'pattern' errors -> INVALID_FORMAT
            - 'enum', 'const' and numeric bound errors -> INVALID_VALUE
            - 'minLength' errors -> TOO_SHORT
            - 'maxLength' errors -> TOO_LONG
            - anything else -> CUSTOM
        """
        path = ".".join(str(p) for p in error.path)

        if error.validator == "required":
            # jsonschema reports the parent object; the missing name is quoted in the message
            missing_prop = error.message.split("'")[1] if "'" in error.message else "field"
            full_path = f"{path}.{missing_prop}" if path else missing_prop
            return FormError(
                field=full_path,
                message=f"Field '{full_path}' is required",
                code=FieldErrorCode.REQUIRED,
            )

        if error.validator == "type":
            received_type = type(error.instance).__name__
            return FormError(
                field=path,
                message=f"Field '{path}' has invalid type. Expected {error.validator_value}, got {received_type}",
                code=FieldErrorCode.INVALID_TYPE,
            )

        if error.validator == "format":
            return FormError(
                field=path,
                message=f"Field '{path}' has invalid format. Expected format: {error.validator_value}",
                code=FieldErrorCode.INVALID_FORMAT,
            )

        if error.validator == "pattern":
            return FormError(
                field=path,
                message=f"Field '{path}' does not match required pattern: {error.validator_value}",
                code=FieldErrorCode.INVALID_FORMAT,
            )

        if error.validator in ("enum", "const"):
            return FormError(
                field=path,
                message=f"Field '{path}' has invalid value. Must be one of: {error.validator_value}",
                code=FieldErrorCode.INVALID_VALUE,
            )

        if error.validator == "minLength":
            return FormError(
                field=path,
                message=f"Field '{path}' is too short. Minimum length: {error.validator_value}",
                code=FieldErrorCode.TOO_SHORT,
            )

        if error.validator == "maxLength":
            return FormError(
                field=path,
                message=f"Field '{path}' is too long. Maximum length: {error.validator_value}",
                code=FieldErrorCode.TOO_LONG,
            )

        if error.validator in ("minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum"):
            return FormError(
                field=path,
                message=f"Field '{path}' violates {error.validator} constraint: {error.validator_value}",
                code=FieldErrorCode.INVALID_VALUE,
            )

        return FormError(
            field=path,
            message=f"Field '{path}' validation failed: {error.message}",
            code=FieldErrorCode.CUSTOM,
        )


__all__ = [
    "ValidObject",
    "Ok",
    "Err",
    "ValidationResult",
    "Validator",
    "FunctionValidator",
    "SchemaValidator",
]
