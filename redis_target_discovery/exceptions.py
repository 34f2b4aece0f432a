"""Custom exception hierarchy for Redis target discovery."""


class DiscoveryError(Exception):
    """Base exception for all discovery errors."""


class ConfigError(DiscoveryError):
    """Invalid or missing configuration."""


class TargetFileError(DiscoveryError):
    """The target file could not be opened or read."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class TargetFileParseError(TargetFileError):
    """The target file is not valid comma-separated data."""

    def __init__(self, message: str, path: str | None = None, line: int | None = None):
        super().__init__(message, path=path)
        self.line = line


class CredentialLookupError(DiscoveryError):
    """A binding credential holds a value that is not a string."""

    def __init__(self, key: str, value: object):
        super().__init__(f"Credential '{key}' is a {type(value).__name__}, expected a string")
        self.key = key
        self.value_type = type(value).__name__


class CloudFoundryEnvError(DiscoveryError):
    """The Cloud Foundry environment or its service catalog is unusable."""


class AzureAuthError(DiscoveryError):
    """No authenticated Azure session could be established."""


class AzureQueryError(DiscoveryError):
    """Listing resource groups in the subscription failed."""
