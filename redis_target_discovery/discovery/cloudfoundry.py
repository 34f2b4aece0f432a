"""Cloud Foundry service bindings (VCAP_SERVICES) as a target source."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import CloudFoundryEnvError, CredentialLookupError
from .lookup import get_alternative
from .models import TargetList

logger = logging.getLogger(__name__)

SOURCE = "cloudfoundry"


@dataclass(frozen=True)
class CloudFoundryService:
    """One bound service instance from VCAP_SERVICES."""

    name: str
    label: str = ""
    tags: tuple[str, ...] = ()
    credentials: dict[str, Any] = field(default_factory=dict)


class CloudFoundryApp:
    """The parsed environment of the running application."""

    def __init__(self, application: dict[str, Any], services: list[CloudFoundryService]):
        self.application = application
        self.services = services

    def services_with_tag(self, tag: str) -> list[CloudFoundryService]:
        """Services carrying *tag* (case-insensitive), in catalog order."""
        wanted = tag.lower()
        matches = [svc for svc in self.services if any(t.lower() == wanted for t in svc.tags)]
        if not matches:
            raise CloudFoundryEnvError(f"No services with tag {tag}")
        return matches


class CloudFoundryEnv:
    """Access to the Cloud Foundry process environment.

    The environment mapping is injectable so tests do not depend on the
    variables of the running process.
    """

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = os.environ if environ is None else environ

    def is_running(self) -> bool:
        return bool(self._environ.get("VCAP_APPLICATION", "").strip())

    def current(self) -> CloudFoundryApp:
        application = self._load_json("VCAP_APPLICATION")
        catalog = self._load_json("VCAP_SERVICES", default="{}")
        services: list[CloudFoundryService] = []
        for label, instances in catalog.items():
            if not isinstance(instances, list):
                raise CloudFoundryEnvError(f"VCAP_SERVICES entry '{label}' is not a list")
            for raw in instances:
                services.append(self._parse_service(label, raw))
        return CloudFoundryApp(application, services)

    def _load_json(self, key: str, default: str | None = None) -> dict[str, Any]:
        raw = self._environ.get(key, default)
        if raw is None:
            raise CloudFoundryEnvError(f"{key} is not set")
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CloudFoundryEnvError(f"{key} is not valid JSON: {exc}") from exc
        if not isinstance(value, dict):
            raise CloudFoundryEnvError(f"{key} must be a JSON object")
        return value

    @staticmethod
    def _parse_service(label: str, raw: Any) -> CloudFoundryService:
        if not isinstance(raw, dict):
            raise CloudFoundryEnvError(f"Malformed service entry under '{label}'")
        credentials = raw.get("credentials") or {}
        if not isinstance(credentials, dict):
            raise CloudFoundryEnvError(f"Service '{raw.get('name')}' has malformed credentials")
        return CloudFoundryService(
            name=str(raw.get("name", "")),
            label=str(raw.get("label", label)),
            tags=tuple(str(t) for t in (raw.get("tags") or [])),
            credentials=credentials,
        )


class CloudFoundryClient:
    """Discovers Redis services bound to this application. Never raises."""

    def __init__(self, env: CloudFoundryEnv | None = None, service_tag: str = "redis"):
        self._env = env if env is not None else CloudFoundryEnv()
        self._service_tag = service_tag

    def discover(self) -> TargetList:
        result = TargetList()
        if not self._env.is_running():
            return result

        try:
            app_env = self._env.current()
        except CloudFoundryEnvError as exc:
            self._warn(result, f"Unable to get current CF environment: {exc}")
            return result

        try:
            services = app_env.services_with_tag(self._service_tag)
        except CloudFoundryEnvError as exc:
            self._warn(result, f"Error while getting {self._service_tag} services: {exc}")
            return result

        for service in services:
            credentials = service.credentials
            try:
                host = get_alternative(credentials, "host", "hostname")
                port = get_alternative(credentials, "port")
                password = get_alternative(credentials, "password")
            except CredentialLookupError as exc:
                self._warn(result, f"Skipping service {service.name}: {exc}", service=service.name)
                continue

            result.add(f"{host}:{port}", password, service.name)

        logger.info("Cloud Foundry discovery found %d targets", len(result),
                    extra={"source": SOURCE, "total_targets": len(result)})
        return result

    @staticmethod
    def _warn(result: TargetList, message: str, service: str | None = None) -> None:
        warning = result.warn(SOURCE, message, subject=service or "")
        logger.warning(message, extra={"source": SOURCE, "service": service, "discovery_warning": warning})
