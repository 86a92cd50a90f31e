"""Field descriptors — the declarative input to the schema compiler.

A descriptor is either a ``FieldDescriptor`` or a plain mapping with the
same keys::

    {"name": "age", "type": "number", "required": True, "min": 18}

``type`` selects a ``FieldKind``. Types the compiler does not know
become ``FieldKind.UNCONSTRAINED`` and accept any value.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from formschema.errors import DescriptorError

logger = logging.getLogger("formschema")


class FieldKind(StrEnum):
    """The value type a field accepts."""

    STRING = "string"
    EMAIL = "email"
    NUMBER = "number"
    DATE = "date"
    UNCONSTRAINED = "any"

    @classmethod
    def parse(cls, type_name: Any) -> "FieldKind":
        """Map a descriptor ``type`` to a kind. Unknown or missing -> UNCONSTRAINED."""
        if isinstance(type_name, FieldKind):
            return type_name
        try:
            kind = cls(type_name)
        except ValueError:
            logger.debug("Unrecognized field type %r; accepting any value", type_name)
            return cls.UNCONSTRAINED
        return kind


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Configuration for one form field.

    ``min`` and ``max`` mean lengths for ``string`` and values for
    ``number``; other kinds ignore them. ``messages`` overrides message
    templates by violation code (``"string.min"``, ``"any.required"``, ...).
    """

    name: str
    type: str | FieldKind | None = None
    required: bool = False
    min: Any = None
    max: Any = None
    messages: Mapping[str, str] | None = None

    @property
    def kind(self) -> FieldKind:
        return FieldKind.parse(self.type)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FieldDescriptor":
        """Build a descriptor from its plain-dict form. Unknown keys are ignored."""
        if not isinstance(data, Mapping):
            raise DescriptorError(
                f"Field descriptor must be a mapping, got {type(data).__name__}"
            )
        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise DescriptorError(f"Field descriptor needs a non-empty name, got {name!r}")
        messages = data.get("messages")
        if messages is not None and not isinstance(messages, Mapping):
            raise DescriptorError(
                f"messages for {name!r} must be a mapping, got {type(messages).__name__}",
                field=name,
            )
        return cls(
            name=name,
            type=data.get("type"),
            required=bool(data.get("required", False)),
            min=data.get("min"),
            max=data.get("max"),
            messages=messages,
        )


def coerce_descriptor(field: "FieldDescriptor | Mapping[str, Any]") -> FieldDescriptor:
    """Accept either descriptor form and return a ``FieldDescriptor``."""
    if isinstance(field, FieldDescriptor):
        if not isinstance(field.name, str) or not field.name:
            raise DescriptorError(f"Field descriptor needs a non-empty name, got {field.name!r}")
        return field
    return FieldDescriptor.from_mapping(field)
