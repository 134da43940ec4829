"""Shared fixtures."""

import json

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from sheets_proxy import config


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Re-read settings from the environment in every test."""
    monkeypatch.setattr(config, "_settings", None)


@pytest.fixture(scope="session")
def private_key_pem():
    """Throwaway RSA key in PEM form."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture
def service_account_info(private_key_pem):
    """A service account key document."""
    return {
        "type": "service_account",
        "project_id": "test-project",
        "private_key_id": "0123456789abcdef",
        "private_key": private_key_pem,
        "client_email": "worker@test-project.iam.gserviceaccount.com",
        "client_id": "1234567890",
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
    }


@pytest.fixture
def service_account_payload(service_account_info):
    return json.dumps(service_account_info).encode()


@pytest.fixture
def authorized_user_payload():
    """An authorized_user credentials document."""
    return json.dumps(
        {
            "type": "authorized_user",
            "client_id": "test-client-id.apps.googleusercontent.com",
            "client_secret": "test-client-secret",
            "refresh_token": "test-refresh-token",
        }
    ).encode()
