"""Azure SDK client for discovering Azure Cache for Redis instances."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from azure.core.exceptions import AzureError
from azure.identity import DefaultAzureCredential, EnvironmentCredential
from azure.mgmt.redis import RedisManagementClient
from azure.mgmt.resource import ResourceManagementClient

from ..config import AzureConfig
from ..exceptions import AzureAuthError, AzureQueryError, ConfigError
from .models import TargetList

logger = logging.getLogger(__name__)

SOURCE = "azure"

TLS_PORT = 6380


@dataclass(frozen=True)
class CloudEnvironment:
    """Endpoints of one Azure cloud."""

    name: str
    resource_manager: str
    authority_host: str

    @property
    def scope(self) -> str:
        return f"{self.resource_manager}.default"


_CLOUDS = {
    "AZUREPUBLICCLOUD": CloudEnvironment(
        "AzurePublicCloud", "https://management.azure.com/", "login.microsoftonline.com",
    ),
    "AZURECHINACLOUD": CloudEnvironment(
        "AzureChinaCloud", "https://management.chinacloudapi.cn/", "login.chinacloudapi.cn",
    ),
    "AZUREUSGOVERNMENTCLOUD": CloudEnvironment(
        "AzureUSGovernmentCloud", "https://management.usgovcloudapi.net/", "login.microsoftonline.us",
    ),
    "AZUREGERMANCLOUD": CloudEnvironment(
        "AzureGermanCloud", "https://management.microsoftazure.de/", "login.microsoftonline.de",
    ),
}


def resolve_cloud(name: str) -> CloudEnvironment:
    """Look up a cloud by name (case-insensitive). Empty means the public cloud."""
    if not name:
        return _CLOUDS["AZUREPUBLICCLOUD"]
    try:
        return _CLOUDS[name.strip().upper()]
    except KeyError:
        known = ", ".join(c.name for c in _CLOUDS.values())
        raise ConfigError(f"Unknown Azure environment '{name}' (known: {known})") from None


def redis_address(host_name: str, enable_non_ssl_port: bool | None) -> str:
    """Plain redis:// on the default port when non-SSL is enabled, TLS on 6380 otherwise."""
    if enable_non_ssl_port:
        return f"redis://{host_name}"
    return f"rediss://{host_name}:{TLS_PORT}"


class AzureRedisClient:
    """Discovers every Redis cache in a subscription using the management SDK."""

    def __init__(self, azure_config: AzureConfig, environ: Mapping[str, str] | None = None):
        self._config = azure_config
        self._environ = os.environ if environ is None else environ

    def discover(self) -> TargetList:
        """Enumerate resource groups, then the caches in each, then their keys.

        Raises ConfigError, AzureAuthError, or AzureQueryError when the
        subscription cannot be walked at all. Problems with a single group or
        cache are recorded as warnings.
        """
        cloud = resolve_cloud(self._config.environment or self._environ.get("AZURE_ENVIRONMENT", ""))
        subscription_id = self._config.subscription_id or self._environ.get("AZURE_SUBSCRIPTION_ID", "")
        if not subscription_id:
            raise ConfigError("Azure subscription id is not set (azure.subscription_id or AZURE_SUBSCRIPTION_ID)")

        credential = self._authenticate(cloud)
        resources = ResourceManagementClient(
            credential, subscription_id,
            base_url=cloud.resource_manager, credential_scopes=[cloud.scope],
        )
        redis = RedisManagementClient(
            credential, subscription_id,
            base_url=cloud.resource_manager, credential_scopes=[cloud.scope],
        )
        return self._collect(resources, redis)

    def _authenticate(self, cloud: CloudEnvironment):
        """Build a credential from the environment and prove it can get a token."""
        if self._config.credential_type == "environment":
            credential = EnvironmentCredential(authority=cloud.authority_host)
        else:
            credential = DefaultAzureCredential(authority=cloud.authority_host)
        try:
            credential.get_token(cloud.scope)
        except AzureError as exc:
            raise AzureAuthError(f"Cannot authenticate against {cloud.name}: {exc}") from exc
        return credential

    def _collect(self, resources: ResourceManagementClient, redis: RedisManagementClient) -> TargetList:
        result = TargetList()

        try:
            groups = list(resources.resource_groups.list())
        except AzureError as exc:
            raise AzureQueryError(f"Listing resource groups failed: {exc}") from exc

        for group in groups:
            rg = group.name
            logger.debug("Listing Redis caches in resource group %s", rg)
            try:
                caches = list(redis.redis.list_by_resource_group(rg))
            except AzureError as exc:
                self._warn(result, f"Listing Redis caches in resource group {rg} failed: {exc}",
                           resource_group=rg)
                continue

            for cache in caches:
                result.add(
                    redis_address(cache.host_name, cache.enable_non_ssl_port),
                    self._primary_key(result, redis, rg, cache.name),
                    cache.name,
                )

        logger.info("Azure discovery found %d targets", len(result),
                    extra={"source": SOURCE, "total_targets": len(result)})
        return result

    def _primary_key(self, result: TargetList, redis: RedisManagementClient, rg: str, name: str) -> str:
        try:
            keys = redis.redis.list_keys(rg, name)
        except AzureError as exc:
            self._warn(result, f"Reading access keys for {name} failed: {exc}", resource_group=rg, cache=name)
            return ""
        if keys is None or keys.primary_key is None:
            self._warn(result, f"You have no rights to read redis keys for {name}", resource_group=rg, cache=name)
            return ""
        return keys.primary_key

    @staticmethod
    def _warn(result: TargetList, message: str, **extra: str) -> None:
        subject = extra.get("cache") or extra.get("resource_group", "")
        warning = result.warn(SOURCE, message, subject=subject)
        logger.warning(message, extra={"source": SOURCE, "discovery_warning": warning, **extra})
