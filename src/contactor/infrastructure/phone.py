"""Phone number normalization to E.164 for contacts added from the command line."""

from collections.abc import Callable

import phonenumbers


def normalize_phone(raw: str, default_region: str | None = None) -> str:
    """Return the E.164 form of raw, or raw (stripped) when it is not a valid number.

    default_region applies to numbers without a leading + ("202 555 1234" with
    "US"). Short or local numbers such as "555-0001" are kept as typed.
    """
    value = (raw or "").strip()
    if not value:
        return value
    try:
        parsed = phonenumbers.parse(value, default_region)
    except phonenumbers.NumberParseException:
        return value
    if not phonenumbers.is_valid_number(parsed):
        return value
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def phone_normalizer(default_region: str | None = None) -> Callable[[str], str]:
    """normalize_phone bound to a region, as ContactWriter expects it."""

    def _normalize(raw: str) -> str:
        return normalize_phone(raw, default_region=default_region)

    return _normalize
