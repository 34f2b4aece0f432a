"""Targets given as separator-delimited address, password and alias strings."""

from __future__ import annotations

from ..config import DEFAULT_REDIS_ADDR
from .models import TargetList


def _split(value: str, separator: str) -> list[str]:
    if not separator:
        # No separator: one element per character, like strings.Split in Go
        return list(value) or [""]
    return value.split(separator)


def _broadcast(values: list[str], length: int) -> list[str]:
    """Pad *values* to *length* by repeating its first element."""
    while len(values) < length:
        values.append(values[0])
    return values


def load_redis_args(addr: str, password: str, alias: str, separator: str = ",") -> TargetList:
    """Parse delimited addresses, passwords and aliases into a TargetList.

    A single password or alias applies to every address. Extra passwords or
    aliases beyond the number of addresses are kept as given.
    """
    if not addr:
        addr = DEFAULT_REDIS_ADDR
    addrs = _split(addr, separator)
    secrets = _broadcast(_split(password, separator), len(addrs))
    aliases = _broadcast(_split(alias, separator), len(addrs))
    return TargetList(addrs=addrs, secrets=secrets, aliases=aliases)
