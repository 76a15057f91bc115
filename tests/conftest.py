"""Shared pytest fixtures for the ldap-sanity test suite."""

from __future__ import annotations

from ipaddress import IPv4Address
from typing import Any, Callable

import pytest

from ldap_sanity.config import AppConfig, DnsConfig, HostRulesConfig, IdentityRulesConfig
from ldap_sanity.model.host import HostRecord
from ldap_sanity.model.identity import IdentitySets
from ldap_sanity.sources.base import Directory, PrincipalRegistry, Resolver

DOMAIN = "ocf.berkeley.edu"


# ---------------------------------------------------------------------------
# Fakes for the external collaborators
# ---------------------------------------------------------------------------


class FakeResolver(Resolver):
    """In-memory DNS: fqdn → A records and address → PTR target."""

    def __init__(self) -> None:
        self.a: dict[str, list[IPv4Address]] = {}
        self.ptr: dict[IPv4Address, str] = {}
        self.queries: list[str] = []

    def add(self, name: str, ip: str, forward: bool = True, reverse: bool = True) -> None:
        address = IPv4Address(ip)
        if forward:
            self.a[f"{name}.{DOMAIN}"] = [address]
        if reverse:
            self.ptr[address] = f"{name}.{DOMAIN}."

    def forward(self, fqdn: str) -> list[IPv4Address]:
        self.queries.append(fqdn)
        return sorted(self.a.get(fqdn, []))

    def reverse(self, address: IPv4Address) -> str | None:
        self.queries.append(str(address))
        return self.ptr.get(address)


class FakeDirectory(Directory):
    def __init__(self, hosts: list[HostRecord], groups: dict[str, set[str]]) -> None:
        self._hosts = hosts
        self._groups = groups

    def hosts(self) -> list[HostRecord]:
        return list(self._hosts)

    def group_members(self, group: str) -> set[str]:
        return set(self._groups.get(group, set()))


class FakeRegistry(PrincipalRegistry):
    def __init__(self, principals: dict[str, list[str]]) -> None:
        self._principals = principals
        self.patterns: list[str] = []

    def list_principals(self, pattern: str) -> list[str]:
        self.patterns.append(pattern)
        return list(self._principals.get(pattern, []))


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig(dns=DnsConfig(domain=DOMAIN))


@pytest.fixture
def host_config() -> HostRulesConfig:
    return HostRulesConfig(
        staffvm_range=(IPv4Address("169.229.226.200"), IPv4Address("169.229.226.252")),
        staffvm_name_exceptions=["hozer-"],
        legacy_attributes=["puppetVar"],
    )


@pytest.fixture
def identity_config() -> IdentityRulesConfig:
    return IdentityRulesConfig(
        staff_group="ocfstaff",
        root_group="ocfroot",
        admin_allowlist=["create", "kadmin"],
    )


# ---------------------------------------------------------------------------
# Model factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_host() -> Callable[..., HostRecord]:
    """Factory: a clean server record, override via kwargs."""

    def _factory(**kwargs: Any) -> HostRecord:
        defaults: dict[str, Any] = {
            "name": "death",
            "kind": "server",
            "mac_address": None,
            "ip_address": "169.229.226.10",
        }
        defaults.update(kwargs)
        return HostRecord(**defaults)

    return _factory


@pytest.fixture
def make_identities() -> Callable[..., IdentitySets]:
    """Factory: a consistent identity snapshot with one root staffer."""

    def _factory(**kwargs: Any) -> IdentitySets:
        defaults: dict[str, Any] = {
            "staff": {"alice", "carol"},
            "root": {"alice"},
            "admin_principals": {"alice"},
            "root_principals": {"alice"},
        }
        defaults.update(kwargs)
        return IdentitySets(**defaults)

    return _factory


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def make_directory() -> Callable[..., FakeDirectory]:
    def _factory(hosts: list[HostRecord] | None = None, **groups: set[str]) -> FakeDirectory:
        return FakeDirectory(hosts or [], groups)

    return _factory


@pytest.fixture
def make_registry() -> Callable[..., FakeRegistry]:
    def _factory(admin: list[str] | None = None, root: list[str] | None = None) -> FakeRegistry:
        return FakeRegistry({"*/admin": admin or [], "*/root": root or []})

    return _factory
