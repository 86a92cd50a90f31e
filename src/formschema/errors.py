"""formschema exception hierarchy.

Only schema misuse is raised. Constraint violations on user input are
returned as messages by ``validate_field`` and ``validate_form``.
"""

from collections.abc import Iterable


class FormSchemaError(Exception):
    """Base for all formschema errors."""


class DescriptorError(FormSchemaError, ValueError):
    """Raised when a field descriptor cannot be compiled.

    Typically raised by ``create_validation_schema()`` for an empty or
    duplicate field name, or a bound the field's type cannot enforce.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnknownFieldError(FormSchemaError, LookupError):
    """Raised when a field name is not part of a compiled schema.

    Includes the known field names in the message so a typo in the
    caller is obvious.
    """

    def __init__(self, field: str, known: Iterable[str] = ()) -> None:
        self.field = field
        self.known = tuple(known)
        options = ", ".join(self.known) or "<none>"
        super().__init__(f"Unknown field {field!r}. Known fields: {options}")
