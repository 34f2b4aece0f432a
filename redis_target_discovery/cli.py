"""Argument parsing, configuration loading, and a one-shot discovery run."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .config import AppConfig, load_config, validate, with_overrides
from .discover import discover_targets
from .exceptions import ConfigError, DiscoveryError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="redis-target-discovery",
        description="Discover the Redis instances a metrics exporter should poll",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to an optional YAML configuration file",
    )
    parser.add_argument(
        "--redis.addr", dest="redis_addr",
        default=os.environ.get("REDIS_ADDR"),
        help="Address(es) of the Redis instance(s), joined by the separator",
    )
    parser.add_argument(
        "--redis.password", dest="redis_password",
        default=os.environ.get("REDIS_PASSWORD"),
        help="Password(s) for the Redis instance(s)",
    )
    parser.add_argument(
        "--redis.alias", dest="redis_alias",
        default=os.environ.get("REDIS_ALIAS"),
        help="Alias(es) for the Redis instance(s)",
    )
    parser.add_argument(
        "--separator",
        help="Separator used to split the address, password and alias lists",
    )
    parser.add_argument(
        "--redis.file", dest="redis_file",
        default=os.environ.get("REDIS_FILE"),
        help="Path to a file with address[,password[,alias]] per line",
    )
    parser.add_argument(
        "--use-cf-bindings", dest="use_cf_bindings",
        action="store_const", const=True,
        help="Add Redis services bound through Cloud Foundry",
    )
    parser.add_argument(
        "--use-azure-redis", dest="use_azure_redis",
        action="store_const", const=True,
        help="Add every Azure Cache for Redis in the subscription",
    )
    parser.add_argument(
        "--log-format", dest="log_format", choices=("json", "text"),
        help="Log output format",
    )
    parser.add_argument(
        "--log-level", dest="log_level",
        help="Log level (DEBUG, INFO, WARNING, ...)",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the configuration and exit",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> AppConfig:
    """Load the YAML file, if any, and apply command-line overrides on top."""
    config = load_config(args.config) if args.config else AppConfig()
    config = with_overrides(
        config,
        redis={
            "addr": args.redis_addr,
            "password": args.redis_password,
            "alias": args.redis_alias,
            "separator": args.separator,
            "file": args.redis_file,
        },
        cloud_foundry={"enabled": args.use_cf_bindings},
        azure={"enabled": args.use_azure_redis},
        logging={"format": args.log_format, "level": args.log_level},
    )
    validate(config)
    return config


def _render(targets) -> str:
    lines = []
    for target in targets.targets():
        lines.append(json.dumps({
            "address": target.address,
            "alias": target.label,
            "secret": "***" if target.secret else "",
        }))
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load config (minimal logging until config is loaded)
    try:
        config = resolve_config(args)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    configure_logging(config.logging)

    if args.validate:
        logger.info("Configuration is valid")
        return 0

    try:
        targets = discover_targets(config)
    except DiscoveryError as exc:
        logger.error("Fatal error: %s", exc)
        return 1

    if targets:
        print(_render(targets))
    return 0
