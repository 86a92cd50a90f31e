"""Built-in checks for compiled field rules.

Each check is a callable with the signature::

    def check(value: Any) -> Violation | None:
        '''Return the violation, or None if the value passes.'''

Parameterized checks are factory functions that return a check::

    def min_length(n: int) -> Check:
        def check(value: Any) -> Violation | None:
            if len(value) < n:
                return Violation("string.min", limit=n)
            return None
        return check

Checks run in order and only after the type check for their kind has
passed, so bound checks can assume the value has the right shape.
Absence (``required``) is handled by the rule itself, before any check.
"""

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class Violation:
    """A failed check: the message code plus the bound it enforced, if any."""

    code: str
    limit: Any = None


# Type alias for a check function
Check: TypeAlias = Callable[[Any], Violation | None]


def is_absent(value: Any) -> bool:
    """Missing keys arrive as ``None``; both count as no input."""
    return value is None


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def text(value: Any) -> Violation | None:
    """Value must be a non-empty string."""
    if not isinstance(value, str):
        return Violation("string.base")
    if value == "":
        return Violation("string.empty")
    return None


def min_length(n: int) -> Check:
    """String must be at least *n* characters."""

    def check(value: Any) -> Violation | None:
        if len(value) < n:
            return Violation("string.min", limit=n)
        return None

    return check


def max_length(n: int) -> Check:
    """String must be at most *n* characters."""

    def check(value: Any) -> Violation | None:
        if len(value) > n:
            return Violation("string.max", limit=n)
        return None

    return check


# ---------------------------------------------------------------------------
# Email
# ---------------------------------------------------------------------------

# Syntax only. Any top-level domain label is accepted; no TLD registry.
# Non-ASCII characters are allowed in both parts (internationalised addresses).
_NON_ASCII = "\\u0080-\\U0010ffff"
_LABEL = rf"[A-Za-z0-9{_NON_ASCII}](?:[A-Za-z0-9\-{_NON_ASCII}]{{0,61}}[A-Za-z0-9{_NON_ASCII}])?"
_EMAIL_RE = re.compile(
    rf"(?!\.)(?!.*\.\.)[A-Za-z0-9!#$%&'*+/=?^_`{{|}}~.\-{_NON_ASCII}]+(?<!\.)"
    rf"@(?:{_LABEL}\.)+{_LABEL}"
)
_EMAIL_MAX_LENGTH = 254
_LOCAL_PART_MAX_LENGTH = 64


def email(value: Any) -> Violation | None:
    """Value must be a syntactically valid email address."""
    if len(value) > _EMAIL_MAX_LENGTH or not _EMAIL_RE.fullmatch(value):
        return Violation("string.email")
    local, _, _ = value.rpartition("@")
    if len(local) > _LOCAL_PART_MAX_LENGTH:
        return Violation("string.email")
    return None


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

_NUMERIC_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?\s*$", re.IGNORECASE)


def as_number(value: Any, convert: bool = True) -> int | float | Decimal | None:
    """Return *value* as a number, or None if it is not one.

    ``bool`` is never a number. Strings are converted only when
    *convert* is true.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return value
    if convert and isinstance(value, str) and _NUMERIC_RE.match(value):
        stripped = value.strip()
        if any(ch in stripped for ch in ".eE"):
            return float(stripped)
        try:
            return int(stripped)
        except ValueError:
            # Past sys.get_int_max_str_digits(); float() gives inf instead
            return float(stripped)
    return None


# Largest integer a double represents exactly (2**53 - 1)
MAX_SAFE_INTEGER = 9_007_199_254_740_991


def number(convert: bool = True, unsafe: bool = False) -> Check:
    """Value must be a finite number, within ±MAX_SAFE_INTEGER unless *unsafe*."""

    def check(value: Any) -> Violation | None:
        result = as_number(value, convert)
        if result is None:
            return Violation("number.base")
        if isinstance(result, Decimal):
            if result.is_nan():
                return Violation("number.base")
            if result.is_infinite():
                return Violation("number.infinity")
        elif isinstance(result, float):
            if math.isnan(result):
                return Violation("number.base")
            if math.isinf(result):
                return Violation("number.infinity")
        if not unsafe and abs(result) > MAX_SAFE_INTEGER:
            return Violation("number.unsafe")
        return None

    return check


def min_value(n: int | float | Decimal) -> Check:
    """Number must be greater than or equal to *n*."""

    def check(value: Any) -> Violation | None:
        if as_number(value) < n:
            return Violation("number.min", limit=n)
        return None

    return check


def max_value(n: int | float | Decimal) -> Check:
    """Number must be less than or equal to *n*."""

    def check(value: Any) -> Violation | None:
        if as_number(value) > n:
            return Violation("number.max", limit=n)
        return None

    return check


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def as_date(value: Any, convert: bool = True) -> date | None:
    """Return *value* as a date or datetime, or None if it is not one.

    With *convert*, ISO-8601 strings and millisecond timestamps are parsed.
    """
    if isinstance(value, date):
        return value
    if not convert or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    if isinstance(value, (int, float, Decimal)):
        try:
            return datetime.fromtimestamp(float(value) / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    return None


def date_value(convert: bool = True) -> Check:
    """Value must be a date, or convertible to one."""

    def check(value: Any) -> Violation | None:
        if as_date(value, convert) is None:
            return Violation("date.base")
        return None

    return check
