"""
Entry point for the app feed proxy.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import uvicorn
from dynaconf import ValidationError

from .application.exceptions import AppFeedError
from .infrastructure.containers import Container
from .web.api import create_app

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str, file_path: Optional[str] = None):
    """Applies basic logging configuration, optionally mirroring to a file."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_path, encoding="utf-8"))
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT, handlers=handlers)


def run_application(args: argparse.Namespace):
    """Wires and serves the application using the DI container."""

    container = Container()
    container.cli_args.from_dict(vars(args))

    try:
        settings = container.config()
        setup_logging(
            level=settings.logging.level,
            file_path=settings.logging.get("file_path"),
        )
        app = create_app(container)
        # Fail fast on missing upstream URLs instead of on the first request.
        container.catalog_source()
        container.review_source()
    except (AppFeedError, ValidationError) as e:
        logger.error(f"An application error occurred: {e}")
        sys.exit(1)

    host = container.cli_args.host() or settings.server.host
    port = container.cli_args.port() or settings.server.port

    logger.info(f"Server starting on {host}:{port}...")
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="App Feed Proxy")

    parser.add_argument(
        "--host",
        default=None,
        help="Address to listen on, overrides server.host.",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on, overrides server.port.",
    )

    cli_args = parser.parse_args()

    run_application(cli_args)
