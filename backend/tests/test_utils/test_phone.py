"""
Tests for phone number helpers.
"""

import pytest

from app.utils.phone import normalize_phone, looks_like_phone, is_valid_mobile, whatsapp_link


@pytest.mark.unit
class TestNormalizePhone:
    """Test phone normalisation."""

    @pytest.mark.parametrize("raw", [
        "+60 12-345 6789",
        "012-345 6789",
        "0123456789",
        "60123456789",
        "(012) 345.6789",
    ])
    def test_formats_share_one_key(self, raw):
        assert normalize_phone(raw) == "123456789"

    def test_strips_only_one_prefix(self):
        # "600..." loses the country code only
        assert normalize_phone("60012345678") == "012345678"

    def test_empty_input(self):
        assert normalize_phone("") == ""
        assert normalize_phone(None) == ""

    def test_bare_subscriber_digits_unchanged(self):
        once = normalize_phone("+60 11-2345 6789")
        assert normalize_phone(once) == once

    def test_no_digits(self):
        assert normalize_phone("call me") == ""
        assert looks_like_phone("call me") is False
        assert looks_like_phone("012 345") is True


@pytest.mark.unit
class TestMobileValidation:
    """Test the Malaysian mobile check used by the wizard."""

    @pytest.mark.parametrize("phone", ["0123456789", "01123456789", "+60123456789", "60123456789"])
    def test_valid(self, phone):
        assert is_valid_mobile(phone)

    @pytest.mark.parametrize("phone", ["", "12345", "0323456789", "012345678", "0123456789\n", "012-345 6789"])
    def test_invalid(self, phone):
        assert not is_valid_mobile(phone)

    def test_whatsapp_link(self):
        assert whatsapp_link("+60 12-345 6789") == "https://wa.me/60123456789"
