"""Host consistency rules.

Every record is run through every rule; one record can produce several
violations. Two rules are cross-row (MAC uniqueness, forward-DNS address
uniqueness): the first record seen with a value owns it and any later
record reusing it is blamed, naming the owner. Which record is "first"
is whatever order the directory returned them in.

DNS misses never raise here; they turn into violations and the pass moves
on to the next record.
"""

from __future__ import annotations

from ipaddress import IPv4Address
from typing import Iterable

from ldap_sanity.config import HostRulesConfig
from ldap_sanity.model.host import HOST_KINDS, HostRecord
from ldap_sanity.model.violation import Violation
from ldap_sanity.sources.base import Resolver


def check(
    hosts: Iterable[HostRecord],
    resolver: Resolver,
    config: HostRulesConfig,
    domain: str,
) -> list[Violation]:
    """Return violations for every host, in iteration order."""
    violations: list[Violation] = []
    mac_owners: dict[str, str] = {}
    address_owners: dict[IPv4Address, str] = {}

    for host in hosts:
        violations += _check_kind(host)
        violations += _check_mac(host, mac_owners)
        violations += _check_staffvm_range(host, config)
        violations += _check_forward_dns(host, resolver, domain, address_owners)
        violations += _check_reverse_dns(host, resolver, domain)
        violations += _check_legacy(host)

    return violations


def fqdn(name: str, domain: str) -> str:
    return f"{name}.{domain}"


def _check_kind(host: HostRecord) -> list[Violation]:
    if host.kind in HOST_KINDS:
        return []
    return [Violation(host.name, f"unknown type {host.kind!r}")]


def _check_mac(host: HostRecord, owners: dict[str, str]) -> list[Violation]:
    found: list[Violation] = []

    if host.mac_address and not host.is_desktop:
        found.append(
            Violation(host.name, f"has MAC address {host.mac_address} but type is {host.kind}, not desktop")
        )
    elif host.is_desktop and not host.mac_address:
        found.append(Violation(host.name, "type is desktop but has no MAC address"))

    if host.mac_address:
        mac = host.mac_address.lower()
        if mac in owners:
            found.append(Violation(host.name, f"MAC address {mac} already used by {owners[mac]}"))
        else:
            owners[mac] = host.name

    return found


def _check_staffvm_range(host: HostRecord, config: HostRulesConfig) -> list[Violation]:
    low, high = config.staffvm_range
    in_range = low <= host.ip_address <= high

    if in_range and host.kind != "staffvm":
        if host.name.startswith(tuple(config.staffvm_name_exceptions)):
            return []
        return [
            Violation(
                host.name,
                f"{host.ip_address} is in the staff VM range ({low}-{high}) but type is {host.kind}",
            )
        ]
    if not in_range and host.kind == "staffvm":
        return [
            Violation(
                host.name,
                f"type is staffvm but {host.ip_address} is outside the staff VM range ({low}-{high})",
            )
        ]
    return []


def _check_forward_dns(
    host: HostRecord,
    resolver: Resolver,
    domain: str,
    owners: dict[IPv4Address, str],
) -> list[Violation]:
    name = fqdn(host.name, domain)
    addresses = resolver.forward(name)
    if not addresses:
        return [Violation(host.name, f"missing forward DNS record for {name}")]

    found: list[Violation] = []
    if host.ip_address in addresses:
        address = host.ip_address
    else:
        address = addresses[0]
        found.append(
            Violation(
                host.name,
                f"forward DNS for {name} is {', '.join(map(str, addresses))}, "
                f"but LDAP says {host.ip_address}",
            )
        )

    if address in owners:
        found.append(Violation(host.name, f"IP address {address} already used by {owners[address]}"))
    else:
        owners[address] = host.name

    return found


def _check_reverse_dns(host: HostRecord, resolver: Resolver, domain: str) -> list[Violation]:
    target = resolver.reverse(host.ip_address)
    if target is None:
        return [Violation(host.name, f"missing reverse DNS record for {host.ip_address}")]

    expected = fqdn(host.name, domain) + "."
    if target.lower() != expected.lower():
        return [
            Violation(
                host.name,
                f"reverse DNS for {host.ip_address} is {target}, expected {expected}",
            )
        ]
    return []


def _check_legacy(host: HostRecord) -> list[Violation]:
    return [
        Violation(host.name, f"deprecated attribute {attr}: {value}")
        for attr, values in host.legacy_attributes.items()
        for value in values
    ]
