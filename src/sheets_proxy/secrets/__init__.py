"""Secret Manager access for credential payloads."""

from sheets_proxy.secrets.client import fetch_secret, secret_version_name

__all__ = ["fetch_secret", "secret_version_name"]
