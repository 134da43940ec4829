"""Google Sheets proxy authenticated with credentials from Secret Manager."""

__version__ = "0.1.0"
