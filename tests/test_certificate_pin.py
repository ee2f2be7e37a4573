"""Tests for homeserver_config.certificate_pin module."""

import pytest
from pydantic import ValidationError

from homeserver_config.certificate_pin import CertificatePin
from homeserver_config.exceptions import DecodeError


class TestCertificatePin:
    """Test cases for CertificatePin."""

    def test_pin_creation(self):
        """Test creating a pin."""
        pin = CertificatePin(hostname="example.org", public_key_hash="sha256/abc=")

        assert pin.hostname == "example.org"
        assert pin.public_key_hash == "sha256/abc="

    def test_pin_immutability(self):
        """Test that pins cannot be changed after creation."""
        pin = CertificatePin(hostname="example.org", public_key_hash="sha256/abc=")

        with pytest.raises(ValidationError):
            pin.hostname = "other.org"

    def test_pin_requires_both_values(self):
        """Test that hostname and hash are required."""
        with pytest.raises(ValidationError):
            CertificatePin(hostname="example.org")

        with pytest.raises(ValidationError):
            CertificatePin(hostname=None, public_key_hash="sha256/abc=")

    def test_pin_equality(self):
        """Test that pins compare by value."""
        assert CertificatePin(hostname="a.com", public_key_hash="h1") == CertificatePin(
            hostname="a.com", public_key_hash="h1"
        )
        assert CertificatePin(hostname="a.com", public_key_hash="h1") != CertificatePin(
            hostname="a.com", public_key_hash="h3"
        )

    def test_to_json(self):
        """Test the wire keys of a pin."""
        pin = CertificatePin(hostname="example.org", public_key_hash="sha256/abc=")

        assert pin.to_json() == {
            "hostname": "example.org",
            "publicHashKey": "sha256/abc=",
        }

    def test_from_json(self):
        """Test decoding a pin."""
        pin = CertificatePin.from_json(
            {"hostname": "example.org", "publicHashKey": "sha256/abc="}
        )

        assert pin == CertificatePin(hostname="example.org", public_key_hash="sha256/abc=")

    @pytest.mark.parametrize(
        "obj, missing",
        [
            ({"publicHashKey": "sha256/abc="}, "hostname"),
            ({"hostname": "example.org"}, "publicHashKey"),
            ({"hostname": "example.org", "public_key_hash": "sha256/abc="}, "publicHashKey"),
        ],
    )
    def test_from_json_missing_key(self, obj, missing):
        """Test that both wire keys are required."""
        with pytest.raises(DecodeError) as exc_info:
            CertificatePin.from_json(obj)

        assert missing in str(exc_info.value)

    @pytest.mark.parametrize(
        "obj",
        [
            {"hostname": 1, "publicHashKey": "sha256/abc="},
            {"hostname": "example.org", "publicHashKey": None},
            "example.org",
            None,
        ],
    )
    def test_from_json_invalid(self, obj):
        """Test that mistyped pins fail to decode."""
        with pytest.raises(DecodeError) as exc_info:
            CertificatePin.from_json(obj)

        assert "Invalid certificate pin format" in str(exc_info.value)
