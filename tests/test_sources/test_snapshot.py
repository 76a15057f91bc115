"""Unit tests for load_snapshot over fake sources."""

from __future__ import annotations

from typing import Callable

from ldap_sanity.config import AppConfig
from ldap_sanity.model.host import HostRecord
from ldap_sanity.sources.snapshot import load_snapshot


def test_snapshot_collects_everything(
    make_host: Callable[..., HostRecord],
    make_directory: Callable[..., object],
    make_registry: Callable[..., object],
    default_config: AppConfig,
) -> None:
    directory = make_directory(
        [make_host(name="a"), make_host(name="b")],
        ocfstaff={"alice", "bob"},
        ocfroot={"alice"},
    )
    registry = make_registry(
        admin=["alice/admin@OCF.BERKELEY.EDU", "create/admin@OCF.BERKELEY.EDU"],
        root=["alice/root@OCF.BERKELEY.EDU"],
    )

    snapshot = load_snapshot(directory, registry, default_config)

    assert [h.name for h in snapshot.hosts] == ["a", "b"]
    assert snapshot.identities.staff == {"alice", "bob"}
    assert snapshot.identities.root == {"alice"}
    assert snapshot.identities.admin_principals == {"alice", "create"}
    assert snapshot.identities.root_principals == {"alice"}


def test_missing_groups_are_empty(
    make_directory: Callable[..., object],
    make_registry: Callable[..., object],
    default_config: AppConfig,
) -> None:
    snapshot = load_snapshot(make_directory(), make_registry(), default_config)
    assert snapshot.identities.staff == set()
    assert snapshot.identities.root == set()


def test_skipping_identities_never_calls_kadmin(
    make_directory: Callable[..., object],
    make_registry: Callable[..., object],
    default_config: AppConfig,
) -> None:
    registry = make_registry()
    load_snapshot(make_directory(), registry, default_config, include_identities=False)
    assert registry.patterns == []  # type: ignore[attr-defined]


def test_skipping_hosts(
    make_host: Callable[..., HostRecord],
    make_directory: Callable[..., object],
    make_registry: Callable[..., object],
    default_config: AppConfig,
) -> None:
    directory = make_directory([make_host()])
    snapshot = load_snapshot(directory, make_registry(), default_config, include_hosts=False)
    assert snapshot.hosts == []
