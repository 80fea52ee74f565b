"""
Decoding Validators for football-data.org payloads.

Every API field is treated as optional unless a record cannot exist
without it (ids). Missing optional fields decode to None or a default;
present fields with the wrong JSON type fail with a ValidationError,
which the API client surfaces as a DecodingError.
"""

from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T')


# ============================================
# VALIDATION ERRORS
# ============================================

class ValidationError(Exception):
    """Base validation error."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(self.format_message())

    def format_message(self) -> str:
        if self.field:
            return f"Validation error on field '{self.field}': {self.message}"
        return f"Validation error: {self.message}"


class TypeValidationError(ValidationError):
    """Error for type validation failures."""
    pass


# ============================================
# FIELD VALIDATORS
# ============================================

class FieldValidator:
    """Base class for field validators."""

    def validate(self, value: Any, field_name: str) -> Any:
        """Validate and return cleaned value."""
        raise NotImplementedError


class RequiredValidator(FieldValidator):
    """Validates that a field is present."""

    def validate(self, value: Any, field_name: str) -> Any:
        if value is None:
            raise ValidationError("Field is required", field_name, value)
        return value


class TypeValidator(FieldValidator):
    """
    Validates the JSON type of a field.

    Integers are accepted where floats are expected. Booleans are never
    accepted as numbers even though bool subclasses int in Python.
    """

    def __init__(self, expected_type: Type):
        self.expected_type = expected_type

    def validate(self, value: Any, field_name: str) -> Any:
        if value is None:
            return None

        if self.expected_type in (int, float) and isinstance(value, bool):
            raise TypeValidationError(
                f"Expected {self.expected_type.__name__}, got bool",
                field_name,
                value
            )

        if self.expected_type == float and isinstance(value, int):
            return float(value)

        if isinstance(value, self.expected_type):
            return value

        raise TypeValidationError(
            f"Expected {self.expected_type.__name__}, got {type(value).__name__}",
            field_name,
            value
        )


# ============================================
# PAYLOAD READERS
# ============================================

def ensure_mapping(data: Any, context: str) -> Dict[str, Any]:
    """Raise unless data is a JSON object."""
    if not isinstance(data, dict):
        raise TypeValidationError(
            f"Expected object, got {type(data).__name__}",
            context,
            data
        )
    return data


def read_field(
    data: Dict[str, Any],
    name: str,
    expected_type: Type,
    required: bool = False,
    default: Any = None
) -> Any:
    """
    Read a scalar field from a payload.

    Args:
        data: JSON object
        name: Field name
        expected_type: Python type the JSON value must have
        required: Raise if the field is missing or null
        default: Value returned when an optional field is missing

    Returns:
        The validated value, or default
    """
    value = data.get(name)
    if required:
        RequiredValidator().validate(value, name)
    elif value is None:
        return default
    return TypeValidator(expected_type).validate(value, name)


def read_object(
    data: Dict[str, Any],
    name: str,
    parser: Callable[[Dict[str, Any]], T],
    required: bool = False
) -> Optional[T]:
    """Read a nested object field and decode it with parser."""
    value = data.get(name)
    if value is None:
        if required:
            raise ValidationError("Field is required", name, value)
        return None
    return parser(ensure_mapping(value, name))


def read_list(
    data: Dict[str, Any],
    name: str,
    parser: Callable[[Dict[str, Any]], T],
    required: bool = False
) -> Optional[Tuple[T, ...]]:
    """
    Read a list of objects and decode each element with parser.

    Returns:
        Tuple of decoded items, or None when an optional list is missing
    """
    value = data.get(name)
    if value is None:
        if required:
            raise ValidationError("Field is required", name, value)
        return None
    if not isinstance(value, list):
        raise TypeValidationError(
            f"Expected list, got {type(value).__name__}",
            name,
            value
        )
    return tuple(parser(ensure_mapping(item, f"{name}[{index}]")) for index, item in enumerate(value))
