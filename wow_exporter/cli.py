"""
Process entry point.

Usage:
    wow-exporter [--host HOST] [--port PORT] [--log-level LEVEL]

Exits with status 1 when the server cannot start, e.g. when one of the
databases is unreachable.
"""
from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from wow_exporter.config import get_settings

logger = logging.getLogger("wow_exporter")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Prometheus exporter for AzerothCore databases")
    parser.add_argument("--host", default=settings.host, help="listen address (env HOST)")
    parser.add_argument("--port", type=int, default=settings.port, help="listen port (env PORT)")
    parser.add_argument("--log-level", default=settings.log_level, help="logging level (env LOG_LEVEL)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    from wow_exporter.api.main import create_app

    config = uvicorn.Config(
        create_app(),
        host=args.host,
        port=args.port,
        lifespan="on",
        log_config=None,
        access_log=False,
    )
    server = uvicorn.Server(config)
    logger.info("Starting WoW Private Server Exporter on %s:%d", args.host, args.port)
    server.run()

    if not server.started:
        logger.error("Exporter failed to start")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
