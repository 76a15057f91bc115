"""HostRecord Pydantic model — one typed row per LDAP host entry."""

from __future__ import annotations

from ipaddress import IPv4Address
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ldap_sanity.errors import RecordError

HOST_KINDS = frozenset(
    {"desktop", "dhcp", "ipmi", "printer", "server", "staffvm", "switch", "vip", "wifi"}
)

# LDAP attribute names read for every host entry
HOST_ATTRIBUTES = ("cn", "type", "macAddress", "ipHostNumber")


class HostRecord(BaseModel):
    """A read-only snapshot of a host entry as stored in the directory."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)      # cn
    kind: str = Field(min_length=1)      # type; unknown values are a rule violation
    mac_address: str | None = None       # macAddress, desktops only
    ip_address: IPv4Address              # ipHostNumber
    legacy_attributes: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def is_desktop(self) -> bool:
        return self.kind == "desktop"

    @classmethod
    def from_ldap(
        cls,
        dn: str,
        attributes: Mapping[str, Any],
        legacy_fields: tuple[str, ...] | list[str] = (),
    ) -> HostRecord:
        """Build a HostRecord from an ldap3 attribute mapping.

        Raises RecordError if cn, type or ipHostNumber is absent or malformed.
        """
        name = _single(dn, attributes, "cn")
        kind = _single(dn, attributes, "type")
        ip = _single(dn, attributes, "ipHostNumber")
        macs = _values(attributes, "macAddress")
        if len(macs) > 1:
            raise RecordError(dn, f"multiple macAddress values: {macs}")

        legacy = {
            attr: values
            for attr in legacy_fields
            if (values := _values(attributes, attr))
        }

        try:
            return cls(
                name=name,
                kind=kind,
                mac_address=macs[0] if macs else None,
                ip_address=ip,
                legacy_attributes=legacy,
            )
        except ValidationError as exc:
            raise RecordError(dn, str(exc)) from exc


def _values(attributes: Mapping[str, Any], key: str) -> list[str]:
    # ldap3 returns a scalar for schema single-valued attrs and a list otherwise
    raw = attributes.get(key)
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(v) for v in raw if v not in (None, "")]
    return [] if raw == "" else [str(raw)]


def _single(dn: str, attributes: Mapping[str, Any], key: str) -> str:
    values = _values(attributes, key)
    if not values:
        raise RecordError(dn, f"missing required attribute {key}")
    return values[0]
