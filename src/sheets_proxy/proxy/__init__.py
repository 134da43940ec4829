"""HTTP proxy serving Google Sheets range reads."""

from sheets_proxy.proxy.cache import ClientCache
from sheets_proxy.proxy.handler import (
    InvalidRequestError,
    ProxyHandler,
    RangeRequest,
    create_app,
    serve,
)

__all__ = [
    "ClientCache",
    "InvalidRequestError",
    "ProxyHandler",
    "RangeRequest",
    "create_app",
    "serve",
]
