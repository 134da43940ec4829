"""Google credential resolution and authenticated client construction."""

from sheets_proxy.google.exceptions import (
    CredentialResolutionError,
    GcloudError,
    IDTokenError,
    InvalidCredentialPayloadError,
    SecretNotConfiguredError,
    SheetsProxyError,
)
from sheets_proxy.google.payload import authenticated_client
from sheets_proxy.google.resolver import AuthorizationMechanism, resolve
from sheets_proxy.google.scopes import REQUIRED_SCOPES, SCOPES
from sheets_proxy.google.service_account import GoogleServiceAccount

__all__ = [
    "AuthorizationMechanism",
    "GoogleServiceAccount",
    "REQUIRED_SCOPES",
    "SCOPES",
    "authenticated_client",
    "resolve",
    "SheetsProxyError",
    "CredentialResolutionError",
    "SecretNotConfiguredError",
    "InvalidCredentialPayloadError",
    "GcloudError",
    "IDTokenError",
]
