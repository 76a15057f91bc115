"""Forward/reverse DNS lookups via dnspython.

NXDOMAIN, empty answers and SERVFAIL from every nameserver (NoNameservers)
are misses: forward() returns [] and reverse() returns None, and the host
rules turn that into a violation for the one record. Timeouts and a missing
resolver configuration are not caught.
"""

from __future__ import annotations

from ipaddress import IPv4Address

import dns.resolver

from ldap_sanity.config import DnsConfig
from ldap_sanity.sources.base import Resolver

_MISSES = (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer, dns.resolver.NoNameservers)


class DnsResolver(Resolver):
    def __init__(
        self,
        config: DnsConfig,
        resolver: dns.resolver.Resolver | None = None,
    ) -> None:
        if resolver is None:
            resolver = dns.resolver.Resolver(configure=not config.nameservers)
            if config.nameservers:
                resolver.nameservers = list(config.nameservers)
        self._resolver = resolver

    def forward(self, fqdn: str) -> list[IPv4Address]:
        try:
            answer = self._resolver.resolve(fqdn, "A")
        except _MISSES:
            return []
        return sorted(IPv4Address(rr.address) for rr in answer)

    def reverse(self, address: IPv4Address) -> str | None:
        try:
            answer = self._resolver.resolve_address(str(address))
        except _MISSES:
            return None
        targets = sorted(rr.target.to_text() for rr in answer)
        return targets[0] if targets else None
