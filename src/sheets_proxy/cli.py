"""CLI for sheets-proxy.

Usage:
    sheets-proxy status                                  # Show configuration status
    sheets-proxy serve [--host H] [--port P]             # Run the proxy locally
    sheets-proxy read <spreadsheet-id> <range>           # Read a range through the proxy's identity
    sheets-proxy whoami                                  # Show the identity stored in the secret
    sheets-proxy id-token --service-account SA --audience URL
    sheets-proxy call <url> <spreadsheet-id> <range> --service-account SA
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

CALL_TIMEOUT = 10.0


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def cmd_status() -> int:
    """Show configuration status."""
    from sheets_proxy.config import ENV_FILE, get_config_status

    status = get_config_status()

    print("=" * 60)
    print("SHEETS-PROXY CONFIGURATION")
    print("=" * 60)
    print()
    print(f"  .env ({ENV_FILE}):  {'[x]' if status['env_file'] else '[ ]'}")
    if status["env_keys"]:
        print(f"    loaded: {', '.join(status['env_keys'])}")
    print(f"  SECRET:                 {'[x]' if status['secret'] else '[ ]'}")
    print(
        "  GOOGLE_APPLICATION_CREDENTIALS: "
        f"{'[x]' if status['google_application_credentials'] else '[ ]'}"
    )
    print(f"  Listen:     {status['host']}:{status['port']}")
    print(f"  Log level:  {status['log_level']}")
    print()

    if not status["secret"]:
        print("Set SECRET=projects/<project>/secrets/<name>/versions/<version>")
        return 1
    return 0


def cmd_serve(host: str | None, port: int | None, debug: bool) -> int:
    """Run the proxy with Flask's development server."""
    from sheets_proxy.config import get_settings
    from sheets_proxy.proxy import create_app

    settings = get_settings()
    app = create_app(settings)
    app.run(host=host or settings.host, port=port or settings.port, debug=debug)
    return 0


def _build_session():
    from sheets_proxy.config import get_settings
    from sheets_proxy.google.client import build_client

    return build_client(get_settings().secret_name)


def cmd_read(spreadsheet_id: str, range_notation: str) -> int:
    """Read a range with the identity stored in the secret."""
    from sheets_proxy.sheets import SheetsAPIError, SheetsClient, normalize_values

    try:
        session = _build_session()
        values = SheetsClient(session).read_range(spreadsheet_id, range_notation)
    except SheetsAPIError as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        print(f"Client setup failed: {e}")
        return 1

    print(json.dumps(normalize_values(values), indent=2))
    return 0


def cmd_whoami() -> int:
    """Show who the secret's credentials authenticate as."""
    from sheets_proxy.google.userinfo import fetch_user_info

    try:
        session = _build_session()
        info = fetch_user_info(session)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    print(f"Email    : {info.email or 'unknown'}")
    print(f"Verified : {info.email_verified}")
    print(f"Subject  : {info.sub}")
    return 0


def _mint_id_token(service_account: str, audience: str) -> str:
    from sheets_proxy.google.id_token import generate_id_token

    session = _build_session()
    return generate_id_token(session.credentials, service_account, audience)


def cmd_id_token(service_account: str, audience: str) -> int:
    """Print an ID token for calling a deployed proxy."""
    try:
        token = _mint_id_token(service_account, audience)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    print(token)
    return 0


def cmd_call(url: str, spreadsheet_id: str, range_notation: str, service_account: str) -> int:
    """Call a deployed proxy with an ID token and print its response."""
    import httpx

    try:
        token = _mint_id_token(service_account, url)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    try:
        response = httpx.post(
            url,
            json={"spreadsheet_id": spreadsheet_id, "range": range_notation},
            headers={"Authorization": f"Bearer {token}"},
            timeout=CALL_TIMEOUT,
        )
    except httpx.HTTPError as e:
        print(f"Error: {e}")
        return 1

    if response.status_code != 200:
        print(f"Error: {response.status_code} {response.text.strip()}")
        return 1

    print(json.dumps(response.json(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="sheets-proxy",
        description="Google Sheets proxy authenticated from Secret Manager",
    )
    parser.add_argument("--log-level", type=str, default=None, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # status command
    subparsers.add_parser("status", help="Show configuration status")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the proxy")
    serve_parser.add_argument("--host", type=str, default=None, help="Listen address")
    serve_parser.add_argument("--port", type=int, default=None, help="Listen port")
    serve_parser.add_argument("--debug", action="store_true", help="Flask debug mode")

    # read command
    read_parser = subparsers.add_parser("read", help="Read a range locally")
    read_parser.add_argument("spreadsheet_id", help="Spreadsheet ID")
    read_parser.add_argument("range", help="A1 range, e.g. \"'Sheet1'!A1:B2\"")

    # whoami command
    subparsers.add_parser("whoami", help="Show the identity stored in the secret")

    # id-token command
    token_parser = subparsers.add_parser("id-token", help="Mint an ID token")
    token_parser.add_argument("--service-account", required=True, help="Service account email")
    token_parser.add_argument("--audience", required=True, help="Token audience (proxy URL)")

    # call command
    call_parser = subparsers.add_parser("call", help="Call a deployed proxy")
    call_parser.add_argument("url", help="Proxy URL")
    call_parser.add_argument("spreadsheet_id", help="Spreadsheet ID")
    call_parser.add_argument("range", help="A1 range")
    call_parser.add_argument("--service-account", required=True, help="Service account email")

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if args.command is None:
        parser.print_help()
        return 0

    from sheets_proxy.config import get_settings

    _setup_logging(args.log_level or get_settings().log_level)

    if args.command == "status":
        return cmd_status()

    if args.command == "serve":
        return cmd_serve(args.host, args.port, args.debug)

    if args.command == "read":
        return cmd_read(args.spreadsheet_id, args.range)

    if args.command == "whoami":
        return cmd_whoami()

    if args.command == "id-token":
        return cmd_id_token(args.service_account, args.audience)

    if args.command == "call":
        return cmd_call(args.url, args.spreadsheet_id, args.range, args.service_account)

    return 0


if __name__ == "__main__":
    sys.exit(main())
