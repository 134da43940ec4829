"""Tests for service account and credential payload handling."""

import json
from unittest.mock import patch

import pytest
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import credentials as user_credentials
from google.oauth2 import service_account

from sheets_proxy.google import (
    REQUIRED_SCOPES,
    SCOPES,
    GoogleServiceAccount,
    InvalidCredentialPayloadError,
    authenticated_client,
)
from sheets_proxy.google.scopes import resolve_scopes


class TestScopes:
    """Test scope resolution."""

    def test_scope_resolution(self):
        """Should resolve scope names to URLs."""
        assert resolve_scopes(["sheets", "drive"]) == [
            "https://www.googleapis.com/auth/spreadsheets",
            "https://www.googleapis.com/auth/drive",
        ]

    def test_unknown_scope_raises(self):
        """Should raise error for unknown scope names."""
        with pytest.raises(ValueError, match="Unknown scope"):
            resolve_scopes(["unknown_scope"])

    def test_full_url_scopes_accepted(self):
        """Should accept full scope URLs."""
        url = "https://www.googleapis.com/auth/documents"
        assert resolve_scopes([url]) == [url]

    def test_required_scopes(self):
        """Should request cloud-platform, drive.file, drive and spreadsheets."""
        assert REQUIRED_SCOPES == (
            SCOPES["cloud_platform"],
            SCOPES["drive_file"],
            SCOPES["drive"],
            SCOPES["sheets"],
        )


class TestGoogleServiceAccount:
    """Test service account keys held in memory."""

    def test_from_info(self, service_account_info):
        """Should expose email, project and scoped credentials."""
        auth = GoogleServiceAccount(service_account_info)
        assert auth.email == "worker@test-project.iam.gserviceaccount.com"
        assert auth.project_id == "test-project"
        credentials = auth.authorized_session().credentials
        assert isinstance(credentials, service_account.Credentials)
        assert set(credentials.scopes) == set(REQUIRED_SCOPES)

    def test_custom_scopes(self, service_account_info):
        """Should resolve scope names passed explicitly."""
        auth = GoogleServiceAccount(service_account_info, scopes=["sheets_readonly"])
        assert auth.scopes == ["https://www.googleapis.com/auth/spreadsheets.readonly"]

    def test_wrong_type_raises(self, service_account_info):
        """Should reject documents that are not service account keys."""
        service_account_info["type"] = "authorized_user"
        with pytest.raises(InvalidCredentialPayloadError, match="expected type"):
            GoogleServiceAccount(service_account_info)

    def test_missing_private_key_raises(self, service_account_info):
        """Should reject keys without a private key."""
        del service_account_info["private_key"]
        with pytest.raises(InvalidCredentialPayloadError):
            GoogleServiceAccount(service_account_info)

    def test_get_info(self, service_account_info):
        """Should describe the account without the key."""
        info = GoogleServiceAccount(service_account_info).get_info()
        assert info["type"] == "service_account"
        assert info["email"] == "worker@test-project.iam.gserviceaccount.com"
        assert info["project_id"] == "test-project"
        assert "private_key" not in info

    def test_authorized_session(self, service_account_info):
        """Should wrap the credentials in an authorized session."""
        auth = GoogleServiceAccount(service_account_info)
        session = auth.authorized_session()
        assert isinstance(session, AuthorizedSession)
        assert session.credentials.service_account_email == auth.email


class TestAuthenticatedClient:
    """Test turning secret payloads into sessions."""

    def test_service_account_payload(self, service_account_payload):
        """Should build a session bound to the service account."""
        session = authenticated_client(service_account_payload)
        assert isinstance(session, AuthorizedSession)
        assert isinstance(session.credentials, service_account.Credentials)
        assert (
            session.credentials.service_account_email
            == "worker@test-project.iam.gserviceaccount.com"
        )

    def test_service_account_identity_logged(self, service_account_payload, caplog):
        """Should log which account and project the proxy runs as."""
        with caplog.at_level("INFO", logger="sheets_proxy.google.payload"):
            authenticated_client(service_account_payload)
        assert "email=worker@test-project.iam.gserviceaccount.com" in caplog.text
        assert "project_id=test-project" in caplog.text

    def test_service_account_wins_over_generic(self, service_account_payload):
        """A service account key must not fall through to the generic loader."""
        with patch("google.auth.load_credentials_from_dict") as generic:
            session = authenticated_client(service_account_payload)
        generic.assert_not_called()
        assert isinstance(session.credentials, service_account.Credentials)

    def test_authorized_user_payload(self, authorized_user_payload):
        """Should load other credential shapes through google.auth."""
        session = authenticated_client(authorized_user_payload)
        assert isinstance(session.credentials, user_credentials.Credentials)
        assert session.credentials.refresh_token == "test-refresh-token"

    def test_broken_service_account_falls_through(self, service_account_info):
        """A service account document that cannot be parsed tries the generic loader."""
        del service_account_info["private_key"]
        payload = json.dumps(service_account_info).encode()
        with pytest.raises(InvalidCredentialPayloadError, match="invalid json file"):
            authenticated_client(payload)

    def test_parse_does_not_fetch_token(self, authorized_user_payload):
        """Parsing should not contact the token endpoint."""
        session = authenticated_client(authorized_user_payload)
        assert session.credentials.token is None

    @pytest.mark.parametrize(
        "payload",
        [
            b"not json",
            b"\xff\xfe",
            b"[]",
            b'"service_account"',
            b'{"foo": "bar"}',
            json.dumps({"installed": {"client_id": "id", "client_secret": "s"}}).encode(),
        ],
    )
    def test_invalid_payload(self, payload):
        """Should reject payloads matching no credential shape."""
        with pytest.raises(InvalidCredentialPayloadError):
            authenticated_client(payload)
