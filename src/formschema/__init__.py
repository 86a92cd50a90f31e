"""Declarative form validation — describe fields once, validate as often as needed.

Usage::

    from formschema import create_validation_schema, validate_field, validate_form

    schema = create_validation_schema([
        {"name": "username", "type": "string", "required": True, "min": 3, "max": 20},
        {"name": "email", "type": "email", "required": True,
         "messages": {"string.email": "Please enter a real address"}},
        {"name": "age", "type": "number", "min": 18},
        {"name": "birthday", "type": "date"},
    ])

    validate_field(schema, "age", 10)
    # {"age": "age should be greater than or equal to 18"}

    result = validate_form(schema, form)
    if not result:
        # result.errors == {"username": "username is required", ...}
        ...
"""

import logging
from collections.abc import Mapping
from typing import Any

from formschema.config import SchemaConfig
from formschema.errors import DescriptorError, FormSchemaError, UnknownFieldError
from formschema.fields import FieldDescriptor, FieldKind
from formschema.messages import DEFAULT_MESSAGES, render_message
from formschema.result import FormResult
from formschema.rules import Violation
from formschema.schema import (
    CompiledSchema,
    FieldRule,
    compile_schema,
    create_validation_schema,
)

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_MESSAGES",
    "CompiledSchema",
    "DescriptorError",
    "FieldDescriptor",
    "FieldKind",
    "FieldRule",
    "FormResult",
    "FormSchemaError",
    "SchemaConfig",
    "UnknownFieldError",
    "Violation",
    "compile_schema",
    "create_validation_schema",
    "render_message",
    "validate_field",
    "validate_form",
]

logger = logging.getLogger("formschema")


def _rule_for(schema: Mapping[str, FieldRule], name: str) -> FieldRule:
    if isinstance(schema, CompiledSchema):
        return schema.extract(name)
    try:
        return schema[name]
    except KeyError:
        raise UnknownFieldError(name, schema) from None


def validate_field(
    schema: Mapping[str, FieldRule],
    name: str,
    value: Any,
) -> dict[str, str | None]:
    """Validate one field's value, e.g. on every keystroke.

    Args:
        schema: A compiled schema (or any mapping of name to ``FieldRule``).
        name: The field to validate.
        value: The current value. ``None`` means no input.

    Returns:
        ``{name: message}`` on failure, ``{name: None}`` on success.

    Raises:
        UnknownFieldError: If *name* is not in *schema*.
    """
    rule = _rule_for(schema, name)
    return {name: rule.check(value)}


def validate_form(
    schema: Mapping[str, FieldRule],
    data: Mapping[str, Any] | None,
) -> FormResult:
    """Validate every schema field against *data*.

    All failing fields are reported in one pass, each with its first
    violation only. Fields missing from *data* count as no input; keys
    in *data* that the schema does not know are ignored.

    Args:
        schema: A compiled schema (or any mapping of name to ``FieldRule``).
        data: Any mapping of field names to values — a ``dict``, parsed
            JSON, or a multi-value form mapping whose ``get()`` returns
            the first value.

    Returns:
        A ``FormResult`` with ``.is_valid`` and ``.errors``.

    Example::

        result = validate_form(schema, {"a": "", "b": 1})
        if not result:
            # result.errors == {"a": "a is not allowed to be empty",
            #                   "b": "b should be greater than or equal to 5"}
            ...
    """
    config = schema.config if isinstance(schema, CompiledSchema) else SchemaConfig()
    data = data if data is not None else {}
    errors: dict[str, str] = {}

    for name, rule in schema.items():
        message = rule.check(data.get(name))
        if message is None:
            continue
        errors[name] = message
        if config.abort_early:
            break

    if errors:
        logger.debug("Form validation failed for: %s", ", ".join(errors))
    return FormResult(errors=errors)
