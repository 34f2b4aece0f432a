"""Data models for discovered Redis targets."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Target:
    """One Redis instance to monitor."""

    address: str
    secret: str = ""  # empty = no auth
    alias: str = ""  # empty = label with the address

    @property
    def label(self) -> str:
        """The display name: alias when set, address otherwise."""
        return self.alias or self.address


@dataclass(frozen=True)
class DiscoveryWarning:
    """A non-fatal problem hit during discovery (missing key, failed lookup, ...)."""

    source: str  # "cloudfoundry" or "azure"
    message: str
    subject: str = ""  # service, resource group or cache the warning is about


@dataclass
class TargetList:
    """Parallel address / secret / alias sequences in discovery order.

    Every source except the argument parser keeps the three lists the same
    length. Argument parsing retains surplus secrets and aliases, so
    ``targets()`` pairs them up to the number of addresses.
    """

    addrs: list[str] = field(default_factory=list)
    secrets: list[str] = field(default_factory=list)
    aliases: list[str] = field(default_factory=list)
    warnings: list[DiscoveryWarning] = field(default_factory=list)

    def add(self, addr: str, secret: str = "", alias: str = "") -> None:
        self.addrs.append(addr)
        self.secrets.append(secret)
        self.aliases.append(alias)

    def warn(self, source: str, message: str, subject: str = "") -> DiscoveryWarning:
        warning = DiscoveryWarning(source=source, message=message, subject=subject)
        self.warnings.append(warning)
        return warning

    def extend(self, other: TargetList) -> None:
        """Append another list's targets and warnings (no deduplication)."""
        self.addrs.extend(other.addrs)
        self.secrets.extend(other.secrets)
        self.aliases.extend(other.aliases)
        self.warnings.extend(other.warnings)

    def targets(self) -> list[Target]:
        return [
            Target(address=addr, secret=secret, alias=alias)
            for addr, secret, alias in zip(self.addrs, self.secrets, self.aliases)
        ]

    def __len__(self) -> int:
        return len(self.addrs)
