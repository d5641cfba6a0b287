"""
Phone number helpers.

Phone numbers are typed by hand in many shapes ("+60 12-345 6789",
"0123456789"), so records are matched on the bare subscriber digits.
"""

import re

_NON_DIGITS = re.compile(r"\D")
_COUNTRY_OR_TRUNK_PREFIX = re.compile(r"^(60|0)")
_MALAYSIAN_MOBILE = re.compile(r"(\+?60|0)1[0-9]{8,9}")


def normalize_phone(phone: str) -> str:
    """
    Reduce a raw phone string to its comparable key.

    Strips every non-digit, then one leading ``60`` or ``0``.
    """
    if not phone:
        return ""
    digits = _NON_DIGITS.sub("", phone)
    return _COUNTRY_OR_TRUNK_PREFIX.sub("", digits, count=1)


def looks_like_phone(phone: str) -> bool:
    return bool(normalize_phone(phone))


def is_valid_mobile(phone: str) -> bool:
    """Check a raw answer against the Malaysian mobile pattern."""
    return bool(_MALAYSIAN_MOBILE.fullmatch(phone or ""))


def whatsapp_link(phone: str) -> str:
    return f"https://wa.me/60{normalize_phone(phone)}"
