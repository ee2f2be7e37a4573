"""Shared pytest fixtures and configuration."""

import pytest
import tempfile
from pathlib import Path

from homeserver_config.certificate_pin import CertificatePin
from homeserver_config.credentials import Credentials


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_credentials():
    """Credentials of a logged in user."""
    return Credentials(
        user_id="@alice:example.org",
        home_server="https://matrix.example.org",
        access_token="syt_YWxpY2U_secret",
        device_id="ABCDEFGHIJ",
    )


@pytest.fixture
def sample_pins():
    """Pins with a duplicated hostname, in a deliberate order."""
    return [
        CertificatePin(hostname="a.com", public_key_hash="h1"),
        CertificatePin(hostname="b.com", public_key_hash="h2"),
        CertificatePin(hostname="a.com", public_key_hash="h3"),
    ]


@pytest.fixture
def sample_config_json():
    """Stored connection config document."""
    return {
        "home_server_url": "https://matrix.example.org",
        "identity_server_url": "https://vector.im",
        "credentials": {
            "user_id": "@alice:example.org",
            "home_server": "https://matrix.example.org",
            "access_token": "syt_YWxpY2U_secret",
            "device_id": "ABCDEFGHIJ",
        },
        "certificate_pins": [
            {
                "hostname": "matrix.example.org",
                "publicHashKey": "sha256/AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA=",
            },
        ],
    }
