"""Message tables and template rendering.

Templates use ``{#label}``, ``{#limit}`` and ``{#value}`` placeholders.
The double-brace forms (``{{#label}}``) are accepted too, so message
tables written for other form libraries can be reused as-is::

    render_message("{#label} should have at least {#limit} characters",
                   label="username", limit=3)
    # 'username should have at least 3 characters'
"""

import re
from collections.abc import Callable, Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import Any

# Messages for violation codes that have no entry in DEFAULT_MESSAGES
ENGINE_MESSAGES: Mapping[str, str] = MappingProxyType(
    {
        "string.base": "{#label} must be a string",
        "number.infinity": "{#label} cannot be infinity",
        "number.unsafe": "{#label} must be a safe number",
    }
)

DEFAULT_MESSAGES: Mapping[str, str] = MappingProxyType(
    {
        "string.email": "{#label} must be a valid email",
        "string.empty": "{#label} is not allowed to be empty",
        "any.required": "{#label} is required",
        "string.min": "{#label} should have at least {#limit} characters",
        "string.max": "{#label} should have at most {#limit} characters",
        "number.base": "{#label} must be a number",
        "number.min": "{#label} should be greater than or equal to {#limit}",
        "number.max": "{#label} should be less than or equal to {#limit}",
        "date.base": "{#label} must be a valid date",
    }
)

_PLACEHOLDER_RE = re.compile(r"\{\{#(\w+)\}\}|\{#(\w+)\}")


def resolve_messages(*overrides: Mapping[str, str] | None) -> Mapping[str, str]:
    """Merge message layers over the built-in tables.

    Later layers win by identical key. ``None`` layers are skipped.
    Returns a read-only view.
    """
    merged: dict[str, str] = {**ENGINE_MESSAGES, **DEFAULT_MESSAGES}
    for layer in overrides:
        if layer:
            merged.update(layer)
    return MappingProxyType(merged)


def format_limit(limit: Any) -> str:
    """Render a bound the way a person would write it (``18``, not ``18.0``)."""
    if isinstance(limit, float) and limit.is_integer():
        return str(int(limit))
    if isinstance(limit, Decimal) and limit == limit.to_integral_value():
        return str(limit.to_integral_value())
    return str(limit)


def render_message(
    template: str,
    label: str,
    limit: Any = None,
    value: Any = None,
    wrap: str = "",
) -> str:
    """Substitute placeholders in *template*.

    Args:
        template: Message template, e.g. ``"{#label} is required"``.
        label: The field name.
        limit: The active bound of the violated check, if any.
        value: The offending value, if any.
        wrap: Characters placed on both sides of the label.

    Unknown placeholders are left in place, as are ``{#limit}`` and
    ``{#value}`` when there is nothing printable to put there.
    """
    renderers: dict[str, Callable[[], str | None]] = {
        "label": lambda: f"{wrap}{label}{wrap}",
        "limit": lambda: None if limit is None else _printable(format_limit, limit),
        "value": lambda: None if value is None else _printable(str, value),
    }

    def substitute(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        render = renderers.get(key)
        replacement = render() if render is not None else None
        if replacement is None:
            return match.group(0)
        return replacement

    return _PLACEHOLDER_RE.sub(substitute, template)


def _printable(to_text: Callable[[Any], str], obj: Any) -> str | None:
    # str() of an int past sys.get_int_max_str_digits() raises ValueError
    try:
        return to_text(obj)
    except ValueError:
        return None
