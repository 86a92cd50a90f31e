"""Tests for formschema.rules — individual checks and value conversion."""

from datetime import UTC, date, datetime
from decimal import Decimal

from formschema.rules import (
    MAX_SAFE_INTEGER,
    Violation,
    as_date,
    as_number,
    date_value,
    email,
    is_absent,
    max_length,
    max_value,
    min_length,
    min_value,
    number,
    text,
)

# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


class TestText:
    def test_valid(self) -> None:
        assert text("hello") is None

    def test_whitespace_is_not_empty(self) -> None:
        assert text("   ") is None

    def test_empty_string(self) -> None:
        assert text("") == Violation("string.empty")

    def test_non_string(self) -> None:
        assert text(42) == Violation("string.base")
        assert text(["a"]) == Violation("string.base")


class TestMinLength:
    def test_at_minimum(self) -> None:
        assert min_length(3)("abc") is None

    def test_below_minimum(self) -> None:
        assert min_length(3)("ab") == Violation("string.min", limit=3)


class TestMaxLength:
    def test_at_limit(self) -> None:
        assert max_length(5)("12345") is None

    def test_exceeds_limit(self) -> None:
        assert max_length(5)("123456") == Violation("string.max", limit=5)


# ---------------------------------------------------------------------------
# Email
# ---------------------------------------------------------------------------


class TestEmail:
    def test_valid(self) -> None:
        assert email("user@example.com") is None

    def test_valid_with_dots_and_plus(self) -> None:
        assert email("first.last+tag@sub.domain.org") is None

    def test_any_tld_accepted(self) -> None:
        assert email("user@example.notarealtld") is None
        assert email("user@example.internal") is None

    def test_missing_at(self) -> None:
        assert email("userexample.com") == Violation("string.email")

    def test_missing_domain(self) -> None:
        assert email("user@") is not None

    def test_single_label_domain(self) -> None:
        assert email("user@localhost") is not None

    def test_leading_dot(self) -> None:
        assert email(".user@example.com") is not None

    def test_trailing_dot_in_local_part(self) -> None:
        assert email("user.@example.com") is not None

    def test_consecutive_dots(self) -> None:
        assert email("us..er@example.com") is not None

    def test_hyphen_starting_label(self) -> None:
        assert email("user@-example.com") is not None

    def test_trailing_newline(self) -> None:
        assert email("user@example.com\n") is not None

    def test_local_part_too_long(self) -> None:
        assert email("a" * 65 + "@example.com") is not None

    def test_unicode_local_part(self) -> None:
        assert email("josé@example.com") is None

    def test_internationalised_domain(self) -> None:
        assert email("user@bücher.de") is None
        assert email("用户@例子.广告") is None

    def test_unicode_still_needs_structure(self) -> None:
        assert email("josé@localhost") is not None
        assert email("josé.@example.com") is not None
        assert email("josé@-bücher.de") is not None


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


class TestAsNumber:
    def test_int_and_float(self) -> None:
        assert as_number(42) == 42
        assert as_number(3.5) == 3.5

    def test_decimal(self) -> None:
        assert as_number(Decimal("1.5")) == Decimal("1.5")

    def test_numeric_strings(self) -> None:
        assert as_number("42") == 42
        assert as_number(" 3.5 ") == 3.5
        assert as_number("1e3") == 1000.0
        assert as_number("-7") == -7

    def test_non_numeric_string(self) -> None:
        assert as_number("abc") is None
        assert as_number("") is None
        assert as_number("12abc") is None

    def test_bool_is_not_a_number(self) -> None:
        assert as_number(True) is None

    def test_no_conversion(self) -> None:
        assert as_number("42", convert=False) is None
        assert as_number(42, convert=False) == 42

    def test_digit_string_past_int_limit(self) -> None:
        assert as_number("9" * 5000) == float("inf")
        assert as_number("-" + "9" * 5000) == float("-inf")


class TestNumber:
    def test_valid(self) -> None:
        assert number()(10) is None
        assert number()("10") is None

    def test_invalid(self) -> None:
        assert number()("abc") == Violation("number.base")

    def test_nan(self) -> None:
        assert number()(float("nan")) == Violation("number.base")
        assert number()(Decimal("NaN")) == Violation("number.base")

    def test_infinity(self) -> None:
        assert number()(float("inf")) == Violation("number.infinity")
        assert number()(Decimal("-Infinity")) == Violation("number.infinity")

    def test_strict(self) -> None:
        assert number(convert=False)("10") == Violation("number.base")

    def test_digit_string_past_int_limit_is_infinity(self) -> None:
        assert number()("9" * 5000) == Violation("number.infinity")

    def test_safe_integer_range(self) -> None:
        assert number()(MAX_SAFE_INTEGER) is None
        assert number()(-MAX_SAFE_INTEGER) is None
        assert number()(MAX_SAFE_INTEGER + 1) == Violation("number.unsafe")
        assert number()(-(2**60)) == Violation("number.unsafe")

    def test_unsafe_floats_and_decimals(self) -> None:
        assert number()(1e20) == Violation("number.unsafe")
        assert number()(Decimal("1e20")) == Violation("number.unsafe")
        assert number()("1e20") == Violation("number.unsafe")

    def test_unsafe_allowed(self) -> None:
        assert number(unsafe=True)(2**60) is None
        assert number(unsafe=True)(10**5000) is None


class TestBounds:
    def test_min_value(self) -> None:
        assert min_value(18)(18) is None
        assert min_value(18)(10) == Violation("number.min", limit=18)

    def test_zero_bound(self) -> None:
        assert min_value(0)(0) is None
        assert min_value(0)(-1) == Violation("number.min", limit=0)

    def test_max_value(self) -> None:
        assert max_value(5)(5) is None
        assert max_value(5)(5.5) == Violation("number.max", limit=5)

    def test_converted_strings(self) -> None:
        assert min_value(18)("25") is None
        assert min_value(18)("17") is not None

    def test_decimal_bound(self) -> None:
        assert max_value(Decimal("9.99"))(10) is not None


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


class TestAsDate:
    def test_date_and_datetime(self) -> None:
        assert as_date(date(2024, 1, 15)) == date(2024, 1, 15)
        moment = datetime(2024, 1, 15, 9, 30)
        assert as_date(moment) is moment

    def test_iso_strings(self) -> None:
        assert as_date("2024-01-15") == datetime(2024, 1, 15)
        assert as_date("2024-01-15T09:30:00") == datetime(2024, 1, 15, 9, 30)

    def test_millisecond_timestamp(self) -> None:
        assert as_date(0) == datetime(1970, 1, 1, tzinfo=UTC)
        assert as_date(86_400_000) == datetime(1970, 1, 2, tzinfo=UTC)

    def test_invalid(self) -> None:
        assert as_date("not a date") is None
        assert as_date("2024-02-30") is None
        assert as_date("") is None
        assert as_date(True) is None
        assert as_date([2024, 1, 15]) is None

    def test_no_conversion(self) -> None:
        assert as_date("2024-01-15", convert=False) is None
        assert as_date(0, convert=False) is None
        assert as_date(date(2024, 1, 15), convert=False) == date(2024, 1, 15)


class TestDateValue:
    def test_valid(self) -> None:
        assert date_value()("2024-01-15") is None

    def test_invalid(self) -> None:
        assert date_value()("yesterday") == Violation("date.base")


class TestIsAbsent:
    def test_none(self) -> None:
        assert is_absent(None)

    def test_falsy_values_are_present(self) -> None:
        assert not is_absent("")
        assert not is_absent(0)
        assert not is_absent(False)
