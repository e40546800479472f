"""Tests for bit-string representation, validation and conversion."""

from __future__ import annotations

import pytest

from bitcalc.bits import (
    MalformedBitStringError,
    digits,
    from_value,
    is_normalized,
    is_well_formed,
    is_zero,
    normalize,
    to_value,
    zeros,
)


# ---------------------------------------------------------------------------
# Well-formedness
# ---------------------------------------------------------------------------

class TestWellFormed:

    @pytest.mark.parametrize("s", ["0", "1", "0011", "10011", "0000"])
    def test_accepts_binary_strings(self, s):
        assert is_well_formed(s)

    @pytest.mark.parametrize("s", ["", "2", "01a", " 1", "1 ", "0b1"])
    def test_rejects_other_strings(self, s):
        assert not is_well_formed(s)

    @pytest.mark.parametrize("s", [None, 1, ["0", "1"], b"01"])
    def test_rejects_non_strings(self, s):
        assert not is_well_formed(s)

    def test_normalized_needs_no_leading_zero(self):
        assert is_normalized("0")
        assert is_normalized("1")
        assert is_normalized("10")
        assert not is_normalized("01")
        assert not is_normalized("00")
        assert not is_normalized("")


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

class TestNormalize:

    @pytest.mark.parametrize("s, expected", [
        ("0011", "11"),
        ("0000", "0"),
        ("0", "0"),
        ("1", "1"),
        ("10011", "10011"),
        ("", "0"),
    ])
    def test_strips_leading_zeros(self, s, expected):
        assert normalize(s) == expected

    def test_idempotent(self):
        for s in ["0011", "000", "1", "0", "0101010"]:
            assert normalize(normalize(s)) == normalize(s)

    def test_preserves_value(self):
        assert to_value(normalize("000101")) == to_value("000101") == 5


# ---------------------------------------------------------------------------
# zeros
# ---------------------------------------------------------------------------

class TestZeros:

    def test_exact_length(self):
        assert zeros(1) == "0"
        assert zeros(4) == "0000"

    def test_represents_zero_but_not_normalized(self):
        z = zeros(3)
        assert is_well_formed(z)
        assert to_value(z) == 0
        assert not is_normalized(z)

    @pytest.mark.parametrize("n", [0, -1])
    def test_rejects_non_positive_width(self, n):
        with pytest.raises(ValueError):
            zeros(n)


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

class TestToValue:

    @pytest.mark.parametrize("s, expected", [
        ("0", 0),
        ("1", 1),
        ("10", 2),
        ("1101", 13),
        ("0011", 3),
        ("0000", 0),
        ("10011", 19),
    ])
    def test_values(self, s, expected):
        assert to_value(s) == expected

    def test_large_value(self):
        assert to_value("1" + "0" * 100) == 2 ** 100

    @pytest.mark.parametrize("s", ["", "012", "x"])
    def test_malformed_raises(self, s):
        with pytest.raises(MalformedBitStringError):
            to_value(s)

    def test_malformed_error_is_value_error(self):
        with pytest.raises(ValueError):
            to_value("abc")


class TestFromValue:

    @pytest.mark.parametrize("n, expected", [
        (0, "0"),
        (1, "1"),
        (2, "10"),
        (3, "11"),
        (13, "1101"),
        (19, "10011"),
    ])
    def test_values(self, n, expected):
        assert from_value(n) == expected

    def test_output_is_normalized(self):
        for n in range(64):
            assert is_normalized(from_value(n))

    def test_large_value(self):
        assert from_value(2 ** 100) == "1" + "0" * 100

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            from_value(-1)

    @pytest.mark.parametrize("n", [1.0, "3", True, None])
    def test_non_int_rejected(self, n):
        with pytest.raises(TypeError):
            from_value(n)


class TestHelpers:

    def test_digits(self):
        assert digits("0101") == [0, 1, 0, 1]

    def test_digits_malformed(self):
        with pytest.raises(MalformedBitStringError) as exc_info:
            digits("01x")
        assert exc_info.value.value == "01x"

    def test_is_zero(self):
        assert is_zero("0")
        assert is_zero("0000")
        assert not is_zero("0010")
