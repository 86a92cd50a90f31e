"""Form validation result — immutable container for per-field errors."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class FormResult:
    """The outcome of validating a whole form against a compiled schema.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = validate_form(schema, data)
        if not result:
            return render_form(data, errors=result.errors)

    ``errors`` maps each failing field to its first violation message::

        {"username": "username is required",
         "age": "age should be greater than or equal to 18"}
    """

    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid

    def as_dict(self) -> dict[str, object]:
        """``{"isValid": ..., "errors": ...}`` for JSON responses."""
        return {"isValid": self.is_valid, "errors": dict(self.errors)}
