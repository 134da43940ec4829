"""Google OAuth scopes used by the proxy."""

# Common Google OAuth scopes
SCOPES = {
    "cloud_platform": "https://www.googleapis.com/auth/cloud-platform",
    "drive": "https://www.googleapis.com/auth/drive",
    "drive_readonly": "https://www.googleapis.com/auth/drive.readonly",
    "drive_file": "https://www.googleapis.com/auth/drive.file",
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets_readonly": "https://www.googleapis.com/auth/spreadsheets.readonly",
    "userinfo_email": "https://www.googleapis.com/auth/userinfo.email",
}

# Requested for every credential the proxy builds
REQUIRED_SCOPES = (
    SCOPES["cloud_platform"],
    SCOPES["drive_file"],
    SCOPES["drive"],
    SCOPES["sheets"],
)


def resolve_scopes(scopes: list[str]) -> list[str]:
    """Resolve scope names to full URLs."""
    resolved = []
    for scope in scopes:
        if scope.startswith("https://"):
            resolved.append(scope)
        elif scope in SCOPES:
            resolved.append(SCOPES[scope])
        else:
            raise ValueError(
                f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
            )
    return resolved
