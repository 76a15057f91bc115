"""LDAP directory client.

The connection is opened once per run through open_directory() and is
always unbound on exit, whether the run finished cleanly or a fault
propagated out of the with-block.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from ldap3 import NONE, Connection, Server
from ldap3.utils.conv import escape_filter_chars

from ldap_sanity.config import LdapConfig
from ldap_sanity.errors import DirectoryError
from ldap_sanity.model.host import HOST_ATTRIBUTES, HostRecord
from ldap_sanity.sources.base import Directory

LOGGER = logging.getLogger(__name__)

HOST_FILTER = "(objectClass=device)"

# LDAP resultCode values that mean "nothing there" rather than failure
_SUCCESS = 0
_NO_SUCH_OBJECT = 32


class LdapDirectory(Directory):
    def __init__(
        self,
        conn: Connection,
        config: LdapConfig,
        legacy_attributes: list[str] | None = None,
    ) -> None:
        self._conn = conn
        self._config = config
        self._legacy = list(legacy_attributes or [])

    def hosts(self) -> list[HostRecord]:
        entries = self._search(
            self._config.hosts_base,
            HOST_FILTER,
            [*HOST_ATTRIBUTES, *self._legacy],
        )
        hosts = [
            HostRecord.from_ldap(entry["dn"], entry["attributes"], self._legacy)
            for entry in entries
        ]
        LOGGER.debug("fetched %d host records from %s", len(hosts), self._config.hosts_base)
        return hosts

    def group_members(self, group: str) -> set[str]:
        entries = self._search(
            self._config.groups_base,
            f"(cn={escape_filter_chars(group)})",
            ["memberUid"],
        )
        if not entries:
            LOGGER.debug("group %s not found under %s", group, self._config.groups_base)
            return set()
        members: set[str] = set()
        for entry in entries:
            raw = entry["attributes"].get("memberUid") or []
            members.update([raw] if isinstance(raw, str) else raw)
        LOGGER.debug("group %s has %d members", group, len(members))
        return members

    def _search(self, base: str, search_filter: str, attributes: list[str]) -> list[dict[str, Any]]:
        self._conn.search(base, search_filter, attributes=attributes)
        result = self._conn.result or {}
        code = result.get("result", _SUCCESS)
        if code == _NO_SUCH_OBJECT:
            return []
        if code != _SUCCESS:
            raise DirectoryError(
                f"search {search_filter} under {base} failed: "
                f"{result.get('description', code)} {result.get('message', '')}".rstrip()
            )
        return [e for e in self._conn.response or [] if e.get("type") == "searchResEntry"]


@contextmanager
def open_directory(
    config: LdapConfig, legacy_attributes: list[str] | None = None
) -> Iterator[LdapDirectory]:
    """Bind anonymously (read-only) to the configured server for one run."""
    LOGGER.debug("connecting to %s", config.uri)
    conn = Connection(Server(config.uri, get_info=NONE), auto_bind=True, read_only=True)
    try:
        yield LdapDirectory(conn, config, legacy_attributes)
    finally:
        conn.unbind()
