"""Tests for phone number normalization (E.164, raw fallback)."""

from contactor.infrastructure.phone import normalize_phone, phone_normalizer


def test_with_country_code_returns_e164():
    assert normalize_phone("+39 312 345 6789") == "+393123456789"
    assert normalize_phone("+1 202 555 1234") == "+12025551234"


def test_without_country_code_uses_default_region():
    assert normalize_phone("202 555 1234", default_region="US") == "+12025551234"
    assert normalize_phone("312 345 6789", default_region="IT") == "+393123456789"


def test_invalid_numbers_are_kept_as_typed():
    assert normalize_phone("555-0001") == "555-0001"
    assert normalize_phone("  555-0001 ", default_region="US") == "555-0001"
    assert normalize_phone("ext. 12") == "ext. 12"
    assert normalize_phone("") == ""


def test_normalizer_binds_region():
    normalize = phone_normalizer("US")
    assert normalize("202 555 1234") == "+12025551234"
    assert phone_normalizer()("202 555 1234") == "202 555 1234"
