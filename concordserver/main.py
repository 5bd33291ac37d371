"""Command-line entry point for the public concordances API."""

import argparse
import logging
import sys
from typing import Optional, Sequence

import uvicorn
from pydantic import ValidationError

from concordances.logging import parse_log_level

from .config import ENV_VARS, Settings
from .service_factory import configure


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="public-concordances-api",
        description="A public RESTful API for accessing concordances. Flags override environment variables.",
    )
    parser.add_argument("--app-system-code", help=f"System code of the application (env: {ENV_VARS['app_system_code']})")
    parser.add_argument("--port", dest="app_port", type=int, help=f"Port to listen on (env: {ENV_VARS['app_port']})")
    parser.add_argument(
        "--public-api-url",
        help=f"API gateway URL used when building concept API URLs, scheme://host (env: {ENV_VARS['public_api_url']})",
    )
    parser.add_argument(
        "--cache-duration",
        help=f"How long GET responses may be cached, e.g. 2h45m (env: {ENV_VARS['cache_duration']})",
    )
    parser.add_argument("--log-level", help=f"Log level of the app (env: {ENV_VARS['log_level']})")
    parser.add_argument(
        "--db-driver-log-level",
        help=f"Database driver log level: DEBUG, INFO, WARN, ERROR (env: {ENV_VARS['db_driver_log_level']})",
    )
    parser.add_argument("--database-url", help=f"SQLAlchemy URL of the graph store (env: {ENV_VARS['database_url']})")
    parser.add_argument(
        "--concepts-path",
        help=f"Concept JSON file or directory loaded at startup (env: {ENV_VARS['concepts_path']})",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    overrides = {field: getattr(args, field) for field in ENV_VARS}
    try:
        settings = Settings.from_env(**overrides)
    except ValidationError as e:
        print(f"Application failed to start: {e}", file=sys.stderr)
        return 1

    configure(settings)
    from .server import app

    uvicorn_level = logging.getLevelName(parse_log_level(settings.log_level)).lower()
    uvicorn.run(app, host=args.host, port=settings.app_port, log_level=uvicorn_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())
