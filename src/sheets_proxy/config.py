"""Process configuration.

Settings come from environment variables, read once at startup:

    SECRET                  - Secret Manager version holding the credential payload
    GOOGLE_CLOUD_PROJECT    - project for SECRET values given as a bare secret name
    SHEETS_PROXY_HOST       - listen address for ``sheets-proxy serve``
    PORT                    - listen port (Cloud Run / Cloud Functions convention)
    SHEETS_PROXY_LOG_LEVEL  - logging level

This module auto-loads a ``.env`` file from the working directory on import.
Variables already present in the environment take precedence.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from sheets_proxy.secrets import secret_version_name

ENV_FILE = Path.cwd() / ".env"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"


def _parse_env_line(line: str) -> tuple[str, str] | None:
    """Split one ``.env`` line into a key and value.

    Accepts ``KEY=value``, ``export KEY=value`` and quoted values. Unquoted
    values end at `` #``. Blank lines, comments and lines without ``=`` give None.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export ") :].lstrip()

    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None

    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return key, value[1:-1]
    return key, value.split(" #", 1)[0].rstrip()


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Copy variables from a ``.env`` file into ``os.environ``.

    Variables already set in the environment are left alone.

    Returns:
        The variables that were set.
    """
    if not env_path.is_file():
        return {}

    loaded = {}
    for line in env_path.read_text().splitlines():
        parsed = _parse_env_line(line)
        if parsed is None:
            continue
        key, value = parsed
        if key not in os.environ:
            os.environ[key] = value
            loaded[key] = value
    return loaded


@dataclass(frozen=True)
class Settings:
    """Process-wide settings."""

    secret_name: str = ""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment.

        Raises:
            ValueError: If PORT is not an integer.
        """
        port = os.environ.get("PORT", str(DEFAULT_PORT))
        try:
            port_number = int(port)
        except ValueError as e:
            raise ValueError(f"PORT must be an integer, got '{port}'") from e

        secret_name = os.environ.get("SECRET", "").strip()
        project = os.environ.get("GOOGLE_CLOUD_PROJECT", "").strip()
        if secret_name and project:
            secret_name = secret_version_name(project, secret_name)

        return cls(
            secret_name=secret_name,
            host=os.environ.get("SHEETS_PROXY_HOST", DEFAULT_HOST),
            port=port_number,
            log_level=os.environ.get("SHEETS_PROXY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the settings, reading the environment on first call."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_config_status() -> dict:
    """Get a summary of the configuration without revealing secrets.

    Returns:
        Dictionary with configuration status.
    """
    settings = get_settings()
    return {
        "env_file": ENV_FILE.is_file(),
        "env_keys": sorted(_loaded),
        "secret": bool(settings.secret_name),
        "host": settings.host,
        "port": settings.port,
        "log_level": settings.log_level,
        "google_application_credentials": bool(os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")),
    }


# Auto-load .env from the working directory on import
_loaded = _load_env_file(ENV_FILE)
