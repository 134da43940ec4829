"""Google authentication exceptions."""


class SheetsProxyError(Exception):
    """Base exception for sheets-proxy errors."""

    pass


class CredentialResolutionError(SheetsProxyError):
    """Raised when no credential source yields an authorization mechanism."""

    def __init__(self, failures: list[tuple[str, Exception]]):
        self.failures = failures
        if failures:
            source, error = failures[-1]
            message = f"No credential source succeeded; last failure from {source}: {error}"
        else:
            message = "No credential sources configured"
        super().__init__(message)


class SecretNotConfiguredError(SheetsProxyError):
    """Raised when no secret resource name is configured."""

    def __init__(self):
        super().__init__(
            "Secret resource name is not set. "
            "Set SECRET to projects/<project>/secrets/<name>/versions/<version>."
        )


class InvalidCredentialPayloadError(SheetsProxyError):
    """Raised when a secret payload matches no known credential shape."""

    pass


class GcloudError(SheetsProxyError):
    """Raised when the gcloud CLI cannot supply a token."""

    pass


class IDTokenError(SheetsProxyError):
    """Raised when the IAM credentials service returns no ID token."""

    pass
