"""HTTP entry points for the proxy.

Request body::

    {"spreadsheet_id": "10xtQZ...", "range": "'Form responses 1'!A1:K1"}

Success body::

    {"Request": {"spreadsheet_id": "...", "range": "..."}, "Values": [["..."]]}

Every failure (client setup, bad input, Sheets API error, encoding) answers
``400 Bad Request`` with a plain-text body. Only the log says which one it was.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from dataclasses import asdict, dataclass
from functools import partial
from typing import Any

from flask import Flask, Request, Response, jsonify, request

from sheets_proxy.config import Settings, get_settings
from sheets_proxy.google.client import build_client
from sheets_proxy.proxy.cache import ClientCache
from sheets_proxy.sheets import SheetsAPIError, SheetsClient, normalize_values

logger = logging.getLogger(__name__)

BAD_REQUEST_BODY = "Bad Request"


class InvalidRequestError(ValueError):
    """Raised when the request body is malformed or incomplete."""

    pass


@dataclass
class RangeRequest:
    """A spreadsheet range to read."""

    spreadsheet_id: str
    range: str

    @classmethod
    def from_json(cls, body: bytes) -> RangeRequest:
        """Parse and validate a request body.

        Raises:
            InvalidRequestError: If the body is not a JSON object or either
                field is missing or empty.
        """
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidRequestError(f"json.loads: {e}") from e
        if not isinstance(data, dict):
            raise InvalidRequestError("Request body must be a JSON object")

        spreadsheet_id = data.get("spreadsheet_id") or ""
        range_value = data.get("range") or ""
        if not isinstance(spreadsheet_id, str) or not isinstance(range_value, str):
            raise InvalidRequestError(f"Parameters must be strings: {data}")

        req = cls(spreadsheet_id=spreadsheet_id, range=range_value)
        if not req.spreadsheet_id or not req.range:
            raise InvalidRequestError(f"Not enough parameters: {req}")
        return req


def bad_request() -> Response:
    return Response(BAD_REQUEST_BODY, status=400, mimetype="text/plain")


class ProxyHandler:
    """Serves range reads with a lazily built, shared Sheets session.

    Usage:
        cache = ClientCache(partial(build_client, settings.secret_name))
        handler = ProxyHandler(cache)
        response = handler.handle(flask_request)
    """

    def __init__(
        self,
        cache: ClientCache,
        sheets_factory: Callable[[Any], SheetsClient] = SheetsClient,
    ):
        self.cache = cache
        self._sheets_factory = sheets_factory

    @classmethod
    def from_settings(cls, settings: Settings) -> ProxyHandler:
        """Create a handler that builds its session from the configured secret."""
        return cls(ClientCache(partial(build_client, settings.secret_name)))

    def handle(self, req: Request) -> Response:
        """Handle one proxy request."""
        try:
            session = self.cache.get()
        except Exception:
            logger.exception("Client setup failed")
            return bad_request()

        try:
            range_request = RangeRequest.from_json(req.get_data())
        except InvalidRequestError as e:
            logger.warning(f"Invalid request: {e}")
            return bad_request()

        try:
            values = self._sheets_factory(session).read_range(
                range_request.spreadsheet_id, range_request.range
            )
            rows = normalize_values(values)
        except SheetsAPIError as e:
            logger.error(f"Sheets read failed: {e}")
            return bad_request()
        except Exception:
            logger.exception("Sheets read failed")
            return bad_request()

        try:
            body = json.dumps({"Request": asdict(range_request), "Values": rows})
        except (TypeError, ValueError) as e:
            logger.error(f"Response encoding failed: {e}")
            return bad_request()

        return Response(body, status=200, mimetype="application/json")


def create_app(
    settings: Settings | None = None,
    handler: ProxyHandler | None = None,
) -> Flask:
    """Create the Flask app serving the proxy.

    Args:
        settings: Process settings. Defaults to ``get_settings()``.
        handler: Prebuilt handler. Defaults to one built from ``settings``.
    """
    if handler is None:
        handler = ProxyHandler.from_settings(settings or get_settings())

    app = Flask(__name__)
    app.extensions["sheets_proxy"] = handler

    @app.route("/", methods=["GET", "POST"])
    def proxy():
        return handler.handle(request)

    @app.get("/healthz")
    def healthz():
        return jsonify({"status": "ok", "client_ready": handler.cache.is_ready})

    return app


_handler: ProxyHandler | None = None
_handler_lock = threading.Lock()


def serve(req: Request) -> Response:
    """Cloud Functions entry point."""
    global _handler
    with _handler_lock:
        if _handler is None:
            _handler = ProxyHandler.from_settings(get_settings())
    return _handler.handle(req)
