"""Schema configuration.

SchemaConfig is a frozen dataclass. It is captured by the compiled
schema, so one form definition always validates the same way.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SchemaConfig:
    """Options shared by every field of a compiled schema.

    All fields have sensible defaults. Override what you need::

        config = SchemaConfig(abort_early=True, label_wrap='"')
    """

    # Project-wide message overrides, applied before per-field messages
    messages: Mapping[str, str] = field(default_factory=dict)

    # Stop form validation at the first failing field
    abort_early: bool = False

    # Accept numeric strings for numbers and ISO strings / ms timestamps for dates
    convert: bool = True

    # Accept numbers beyond ±(2**53 - 1) instead of reporting number.unsafe
    unsafe: bool = False

    # Wrapped around the field name when rendering {#label}
    label_wrap: str = ""
