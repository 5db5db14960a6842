#!/usr/bin/env python3
# main.py
"""
Entry point of the FeedMixer service.

Loads the configuration once, configures logging and serves the aggregation
endpoint with uvicorn. An invalid configuration (for instance a missing or
zero advertisement frequency) stops the process before it starts serving.

Usage:
    python main.py                          # config.toml / .env / environment
    python main.py --config /etc/feedmixer.toml
    python main.py --host 0.0.0.0 --port 9000
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from feedmixer import __version__
from feedmixer.config_manager import ConfigError, load_config
from feedmixer.serving import create_app
from feedmixer.utils import setup_logging

UVICORN_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="FeedMixer aggregation service")
    parser.add_argument("--config", type=Path, help="Path to the TOML configuration file")
    parser.add_argument("--env-file", type=Path, help="Path to a .env file")
    parser.add_argument("--host", type=str, help="Override the configured bind host")
    parser.add_argument("--port", type=int, help="Override the configured bind port")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config, env_file=args.env_file)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    logger_factory = setup_logging(config.logging_options())
    logger_factory.log_system_startup(version=__version__, config_summary=config.summary())

    host = args.host or config.server.host
    port = args.port or config.server.port
    app = create_app(config)
    uvicorn_level = config.logging.level.lower()
    if uvicorn_level not in UVICORN_LEVELS:
        uvicorn_level = "info"
    uvicorn.run(app, host=host, port=port, log_level=uvicorn_level)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
