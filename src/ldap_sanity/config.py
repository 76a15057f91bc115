"""PyYAML loader → typed config dataclasses."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from ipaddress import IPv4Address
from pathlib import Path

import yaml


@dataclass
class LdapConfig:
    uri: str = "ldaps://ldap.ocf.berkeley.edu"
    hosts_base: str = "ou=Hosts,dc=OCF,dc=Berkeley,dc=EDU"
    groups_base: str = "ou=Group,dc=OCF,dc=Berkeley,dc=EDU"


@dataclass
class KerberosConfig:
    kadmin_command: str = "kadmin"
    principal: str | None = None  # e.g. "create/admin"; None = current ticket
    keytab: str | None = None


@dataclass
class DnsConfig:
    domain: str = "ocf.berkeley.edu"
    nameservers: list[str] = field(default_factory=list)  # empty = system resolv.conf


@dataclass
class HostRulesConfig:
    enabled: bool = True
    staffvm_range: tuple[IPv4Address, IPv4Address] = (
        IPv4Address("169.229.226.200"),
        IPv4Address("169.229.226.252"),
    )
    staffvm_name_exceptions: list[str] = field(default_factory=lambda: ["hozer-"])
    legacy_attributes: list[str] = field(default_factory=lambda: ["puppetVar"])


@dataclass
class IdentityRulesConfig:
    enabled: bool = True
    staff_group: str = "ocfstaff"
    root_group: str = "ocfroot"
    # Only exempts /admin principals lacking a /root twin, not the reverse.
    admin_allowlist: list[str] = field(default_factory=lambda: ["create", "kadmin"])


@dataclass
class AppConfig:
    ldap: LdapConfig = field(default_factory=LdapConfig)
    kerberos: KerberosConfig = field(default_factory=KerberosConfig)
    dns: DnsConfig = field(default_factory=DnsConfig)
    hosts: HostRulesConfig = field(default_factory=HostRulesConfig)
    identities: IdentityRulesConfig = field(default_factory=IdentityRulesConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load sanity.yaml and return a typed AppConfig.

    Falls back to defaults if the file is absent or a section is missing.
    Environment variables LDAP_URI, KADMIN_PRINCIPAL and KADMIN_KEYTAB
    override whatever the file says.
    """
    raw: dict = {}
    if path is None:
        path = Path(__file__).parent.parent.parent / "config" / "sanity.yaml"

    resolved = Path(path)
    if resolved.exists():
        with resolved.open() as f:
            raw = yaml.safe_load(f) or {}

    ldap_raw = raw.get("ldap") or {}
    krb_raw = raw.get("kerberos") or {}
    dns_raw = raw.get("dns") or {}
    hosts_raw = raw.get("hosts") or {}
    ident_raw = raw.get("identities") or {}

    defaults = AppConfig()

    return AppConfig(
        ldap=LdapConfig(
            uri=os.getenv("LDAP_URI", ldap_raw.get("uri", defaults.ldap.uri)),
            hosts_base=ldap_raw.get("hosts_base", defaults.ldap.hosts_base),
            groups_base=ldap_raw.get("groups_base", defaults.ldap.groups_base),
        ),
        kerberos=KerberosConfig(
            kadmin_command=krb_raw.get("kadmin_command", defaults.kerberos.kadmin_command),
            principal=os.getenv("KADMIN_PRINCIPAL", krb_raw.get("principal")),
            keytab=os.getenv("KADMIN_KEYTAB", krb_raw.get("keytab")),
        ),
        dns=DnsConfig(
            domain=dns_raw.get("domain", defaults.dns.domain),
            nameservers=list(dns_raw.get("nameservers") or []),
        ),
        hosts=HostRulesConfig(
            enabled=hosts_raw.get("enabled", True),
            staffvm_range=_parse_range(
                hosts_raw.get("staffvm_range"), defaults.hosts.staffvm_range
            ),
            staffvm_name_exceptions=list(
                hosts_raw.get("staffvm_name_exceptions", defaults.hosts.staffvm_name_exceptions)
            ),
            legacy_attributes=list(
                hosts_raw.get("legacy_attributes", defaults.hosts.legacy_attributes)
            ),
        ),
        identities=IdentityRulesConfig(
            enabled=ident_raw.get("enabled", True),
            staff_group=ident_raw.get("staff_group", defaults.identities.staff_group),
            root_group=ident_raw.get("root_group", defaults.identities.root_group),
            admin_allowlist=list(
                ident_raw.get("admin_allowlist", defaults.identities.admin_allowlist)
            ),
        ),
    )


def _parse_range(
    raw: list[str] | None, default: tuple[IPv4Address, IPv4Address]
) -> tuple[IPv4Address, IPv4Address]:
    if not raw:
        return default
    if len(raw) != 2:
        raise ValueError(f"staffvm_range needs exactly two addresses, got {raw!r}")
    low, high = IPv4Address(str(raw[0])), IPv4Address(str(raw[1]))
    if low > high:
        raise ValueError(f"staffvm_range is inverted: {low} > {high}")
    return low, high
