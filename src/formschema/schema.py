"""Schema compiler — field descriptors in, immutable rules out.

Each descriptor is compiled once into a ``FieldRule`` holding every
check and message it needs. ``CompiledSchema`` maps field names to
those rules in descriptor order and is never mutated afterwards, so one
schema can serve any number of validation calls.

Bound policy differs by kind:

- ``string``: ``min``/``max`` apply only when truthy. ``0`` means no bound.
- ``number``: ``min``/``max`` apply whenever they are not ``None``.
  ``0`` is a real bound.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from formschema import rules
from formschema.config import SchemaConfig
from formschema.errors import DescriptorError, UnknownFieldError
from formschema.fields import FieldDescriptor, FieldKind, coerce_descriptor
from formschema.messages import render_message, resolve_messages
from formschema.rules import Check, Violation

logger = logging.getLogger("formschema")

_FALLBACK_TEMPLATE = "{#label} is invalid"


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Compiled checks and messages for one field."""

    name: str
    kind: FieldKind
    required: bool
    min: Any
    max: Any
    messages: Mapping[str, str]
    checks: tuple[Check, ...]
    label_wrap: str = ""

    def violation(self, value: Any) -> Violation | None:
        """Return the first violation for *value*, or None if it passes."""
        if rules.is_absent(value):
            return Violation("any.required") if self.required else None
        for check in self.checks:
            found = check(value)
            if found is not None:
                return found
        return None

    def check(self, value: Any) -> str | None:
        """Return the formatted message for the first violation, or None."""
        found = self.violation(value)
        if found is None:
            return None
        return self.format(found, value)

    def format(self, violation: Violation, value: Any = None) -> str:
        template = self.messages.get(violation.code, _FALLBACK_TEMPLATE)
        return render_message(
            template,
            label=self.name,
            limit=violation.limit,
            value=value,
            wrap=self.label_wrap,
        )


class CompiledSchema(Mapping[str, FieldRule]):
    """Read-only mapping of field name to ``FieldRule``.

    Usable as a plain mapping of rules, or as one combined schema
    through ``extract()``.
    """

    __slots__ = ("_config", "_rules")

    def __init__(
        self,
        field_rules: Mapping[str, FieldRule],
        config: SchemaConfig | None = None,
    ) -> None:
        self._rules = MappingProxyType(dict(field_rules))
        self._config = config or SchemaConfig()

    @property
    def config(self) -> SchemaConfig:
        return self._config

    def extract(self, name: str) -> FieldRule:
        """Return the rule for *name*.

        Raises:
            UnknownFieldError: If *name* is not a field of this schema.
        """
        try:
            return self._rules[name]
        except KeyError:
            raise UnknownFieldError(name, self._rules) from None

    def __getitem__(self, name: str) -> FieldRule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}:{rule.kind}" for name, rule in self._rules.items())
        return f"CompiledSchema({fields})"


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


def _length_bound(descriptor: FieldDescriptor, attr: str) -> int | None:
    limit = getattr(descriptor, attr)
    if not limit:
        return None
    if isinstance(limit, bool) or not isinstance(limit, (int, float, Decimal)):
        raise DescriptorError(
            f"{attr} for string field {descriptor.name!r} must be an integer, got {limit!r}",
            field=descriptor.name,
        )
    try:
        whole = int(limit)
    except (ValueError, OverflowError):
        whole = None
    if whole is None or whole != limit or whole < 0:
        raise DescriptorError(
            f"{attr} for string field {descriptor.name!r} must be a non-negative integer, "
            f"got {limit!r}",
            field=descriptor.name,
        )
    return whole


def _value_bound(descriptor: FieldDescriptor, attr: str) -> int | float | Decimal | None:
    limit = getattr(descriptor, attr)
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, (int, float, Decimal)):
        raise DescriptorError(
            f"{attr} for number field {descriptor.name!r} must be a number, got {limit!r}",
            field=descriptor.name,
        )
    if limit != limit:  # NaN
        raise DescriptorError(
            f"{attr} for number field {descriptor.name!r} must not be NaN",
            field=descriptor.name,
        )
    return limit


def build_rule(descriptor: FieldDescriptor, config: SchemaConfig | None = None) -> FieldRule:
    """Compile one descriptor into a ``FieldRule``."""
    config = config or SchemaConfig()
    kind = descriptor.kind
    lower: Any = None
    upper: Any = None
    checks: list[Check]

    match kind:
        case FieldKind.STRING:
            lower = _length_bound(descriptor, "min")
            upper = _length_bound(descriptor, "max")
            checks = [rules.text]
            if lower is not None:
                checks.append(rules.min_length(lower))
            if upper is not None:
                checks.append(rules.max_length(upper))
        case FieldKind.EMAIL:
            checks = [rules.text, rules.email]
        case FieldKind.NUMBER:
            lower = _value_bound(descriptor, "min")
            upper = _value_bound(descriptor, "max")
            checks = [rules.number(config.convert, config.unsafe)]
            if lower is not None:
                checks.append(rules.min_value(lower))
            if upper is not None:
                checks.append(rules.max_value(upper))
        case FieldKind.DATE:
            checks = [rules.date_value(config.convert)]
        case FieldKind.UNCONSTRAINED:
            checks = []

    return FieldRule(
        name=descriptor.name,
        kind=kind,
        required=bool(descriptor.required),
        min=lower,
        max=upper,
        messages=resolve_messages(config.messages, descriptor.messages),
        checks=tuple(checks),
        label_wrap=config.label_wrap,
    )


def create_validation_schema(
    fields: Iterable[FieldDescriptor | Mapping[str, Any]],
    config: SchemaConfig | None = None,
) -> CompiledSchema:
    """Compile field descriptors into a reusable schema.

    Args:
        fields: Descriptors in form order, as ``FieldDescriptor`` instances
            or plain mappings.
        config: Options shared by every field. Defaults to ``SchemaConfig()``.

    Returns:
        A ``CompiledSchema`` in descriptor order.

    Raises:
        DescriptorError: If a descriptor is malformed or a name repeats.

    Example::

        schema = create_validation_schema([
            {"name": "username", "type": "string", "required": True, "max": 20},
            {"name": "age", "type": "number", "min": 18},
        ])
    """
    config = config or SchemaConfig()
    compiled: dict[str, FieldRule] = {}

    for field in fields:
        descriptor = coerce_descriptor(field)
        if descriptor.name in compiled:
            raise DescriptorError(
                f"Duplicate field name: {descriptor.name!r}", field=descriptor.name
            )
        compiled[descriptor.name] = build_rule(descriptor, config)

    logger.debug("Compiled schema with %d fields", len(compiled))
    return CompiledSchema(compiled, config)


compile_schema = create_validation_schema
