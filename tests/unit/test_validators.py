"""
Input parser tests.
"""

from datetime import date

import pytest

from intake.validators import (
    excerpt,
    normalize_kenyan_mobile,
    normalize_sender_id,
    parse_date,
    parse_gender,
    parse_national_id,
    parse_numeric_id,
)


class TestKenyanMobile:
    """Normalization of guardian WhatsApp numbers."""

    @pytest.mark.parametrize("raw", [
        "0712345678",
        "+254712345678",
        "254712345678",
        "712345678",
        "0712 345 678",
        "+254-712-345-678",
    ])
    def test_prefix_variants_normalize_to_254(self, raw):
        """0, +254, 254 and bare forms all end up as 254XXXXXXXXX."""
        assert normalize_kenyan_mobile(raw) == "254712345678"

    def test_01_prefix_numbers(self):
        """Newer 01XX numbers are accepted."""
        assert normalize_kenyan_mobile("0110123456") == "254110123456"

    @pytest.mark.parametrize("raw", [
        "",
        "12345",
        "0812345678",
        "07123456789",
        "+255712345678",
        "2024-01-01",
        "phone",
    ])
    def test_invalid_numbers_rejected(self, raw):
        assert normalize_kenyan_mobile(raw) is None


class TestDates:

    def test_valid_date(self):
        assert parse_date("2025-03-14") == date(2025, 3, 14)

    @pytest.mark.parametrize("raw", ["14/03/2025", "2025-3-14", "2025-02-30", "tomorrow", ""])
    def test_invalid_dates(self, raw):
        """Wrong shape and impossible calendar dates are both rejected."""
        assert parse_date(raw) is None


class TestIdentifiers:

    def test_national_id_min_length(self):
        assert parse_national_id("12345") == "12345"
        assert parse_national_id("1234") is None

    def test_national_id_keeps_leading_zeros(self):
        assert parse_national_id("00123456") == "00123456"

    def test_national_id_digits_only(self):
        assert parse_national_id("12 345 678") is None
        assert parse_national_id("A1234567") is None

    def test_numeric_id(self):
        assert parse_numeric_id("42") == 42
        assert parse_numeric_id("0") is None
        assert parse_numeric_id("-3") is None
        assert parse_numeric_id("4a") is None


class TestGender:

    @pytest.mark.parametrize("raw,expected", [
        ("m", "M"), ("M", "M"), ("male", "M"),
        ("f", "F"), ("F", "F"), ("Female", "F"),
    ])
    def test_accepted(self, raw, expected):
        assert parse_gender(raw) == expected

    def test_rejected(self):
        assert parse_gender("x") is None
        assert parse_gender("") is None


class TestHelpers:

    def test_sender_id_digits_only(self):
        assert normalize_sender_id("+254 711-000-111") == "254711000111"
        assert normalize_sender_id("whatsapp:+254711000111") == "254711000111"
        assert normalize_sender_id("") == ""

    def test_excerpt_bounds_length(self):
        text = "x" * 500
        result = excerpt(text)
        assert len(result) == 200
        assert result.endswith("…")

    def test_excerpt_short_text_untouched(self):
        assert excerpt('{"error":"bad"}') == '{"error":"bad"}'

    def test_excerpt_empty(self):
        assert excerpt(None) == "no details returned"
