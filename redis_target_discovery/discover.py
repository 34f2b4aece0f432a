"""Combine every configured source into one target list."""

from __future__ import annotations

import logging
import time

from .config import AppConfig
from .discovery import TargetSource
from .discovery.args import load_redis_args
from .discovery.azure_client import AzureRedisClient
from .discovery.cloudfoundry import CloudFoundryClient, CloudFoundryEnv
from .discovery.models import TargetList
from .discovery.targets_file import load_redis_file

logger = logging.getLogger(__name__)


def discover_targets(
    config: AppConfig,
    cf_env: CloudFoundryEnv | None = None,
    azure_client: TargetSource | None = None,
) -> TargetList:
    """Run one discovery pass: file or args, then Cloud Foundry, then Azure.

    A configured target file replaces the argument-supplied targets. Platform
    sources are appended in order without deduplication. File and Azure errors
    propagate; Cloud Foundry problems only show up as warnings.
    """
    start = time.monotonic()
    redis = config.redis

    if redis.file:
        targets = load_redis_file(redis.file)
    else:
        targets = load_redis_args(redis.addr, redis.password, redis.alias, redis.separator)

    if config.cloud_foundry.enabled:
        client = CloudFoundryClient(cf_env, service_tag=config.cloud_foundry.service_tag)
        targets.extend(client.discover())

    if config.azure.enabled:
        source = azure_client if azure_client is not None else AzureRedisClient(config.azure)
        targets.extend(source.discover())

    elapsed = time.monotonic() - start
    logger.info(
        "Discovery complete with %d targets and %d warnings in %.2fs",
        len(targets), len(targets.warnings), elapsed,
        extra={"total_targets": len(targets)},
    )
    return targets
