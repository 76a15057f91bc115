"""SanityChecker — runs the enabled rule sets over a Snapshot.

Host rules run first, then identity rules. Each rule module returns its own
list of violations; the checker only concatenates them into one Report.

    hosts       → rules.hosts.check      (needs the DNS resolver)
    identities  → rules.identities.check (pure set arithmetic)
"""

from __future__ import annotations

import logging

from ldap_sanity.config import AppConfig
from ldap_sanity.model.violation import Report
from ldap_sanity.rules import hosts, identities
from ldap_sanity.sources.base import Resolver
from ldap_sanity.sources.snapshot import Snapshot

LOGGER = logging.getLogger(__name__)


class SanityChecker:
    def __init__(self, resolver: Resolver, config: AppConfig) -> None:
        self._resolver = resolver
        self._config = config

    def run(self, snapshot: Snapshot) -> Report:
        """Evaluate every enabled rule set and return the merged report."""
        report = Report()

        if self._config.hosts.enabled:
            found = hosts.check(
                snapshot.hosts, self._resolver, self._config.hosts, self._config.dns.domain
            )
            LOGGER.info("host rules: %d violations over %d hosts", len(found), len(snapshot.hosts))
            report.extend(found)

        if self._config.identities.enabled:
            found = identities.check(snapshot.identities, self._config.identities)
            LOGGER.info("identity rules: %d violations", len(found))
            report.extend(found)

        return report
