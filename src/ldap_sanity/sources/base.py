"""Abstract base classes for the three external collaborators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from ipaddress import IPv4Address

from ldap_sanity.model.host import HostRecord


class Directory(ABC):
    @abstractmethod
    def hosts(self) -> list[HostRecord]:
        """Return every host entry, in the order the directory returns them."""
        ...

    @abstractmethod
    def group_members(self, group: str) -> set[str]:
        """Return member usernames of *group*; empty if the group does not exist."""
        ...


class PrincipalRegistry(ABC):
    @abstractmethod
    def list_principals(self, pattern: str) -> list[str]:
        """Return every principal matching a wildcard such as '*/admin'."""
        ...


class Resolver(ABC):
    @abstractmethod
    def forward(self, fqdn: str) -> list[IPv4Address]:
        """Every A record for *fqdn*, sorted; empty when there is none."""
        ...

    @abstractmethod
    def reverse(self, address: IPv4Address) -> str | None:
        """PTR target for *address* (with trailing dot), or None when there is none."""
        ...
