"""Snapshot — everything a run needs, fetched once up front.

Rule functions receive a Snapshot (plain data, no I/O handles) so they stay
pure apart from the DNS lookups the host rules make per record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ldap_sanity.config import AppConfig
from ldap_sanity.model.host import HostRecord
from ldap_sanity.model.identity import IdentitySets, principal_username
from ldap_sanity.sources.base import Directory, PrincipalRegistry

LOGGER = logging.getLogger(__name__)


@dataclass
class Snapshot:
    hosts: list[HostRecord] = field(default_factory=list)
    identities: IdentitySets = field(default_factory=IdentitySets)


def load_snapshot(
    directory: Directory,
    registry: PrincipalRegistry,
    config: AppConfig,
    *,
    include_hosts: bool = True,
    include_identities: bool = True,
) -> Snapshot:
    """Fetch host records, group members and principals for one run."""
    snapshot = Snapshot()

    if include_hosts:
        snapshot.hosts = directory.hosts()

    if include_identities:
        ident = config.identities
        snapshot.identities = IdentitySets(
            staff=directory.group_members(ident.staff_group),
            root=directory.group_members(ident.root_group),
            admin_principals=_usernames(registry.list_principals("*/admin")),
            root_principals=_usernames(registry.list_principals("*/root")),
        )

    LOGGER.info(
        "snapshot: %d hosts, %d staff, %d root, %d /admin, %d /root",
        len(snapshot.hosts),
        len(snapshot.identities.staff),
        len(snapshot.identities.root),
        len(snapshot.identities.admin_principals),
        len(snapshot.identities.root_principals),
    )
    return snapshot


def _usernames(principals: list[str]) -> set[str]:
    return {principal_username(p) for p in principals}
