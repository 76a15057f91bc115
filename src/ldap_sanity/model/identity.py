"""Identity snapshot — group memberships and Kerberos principal holders."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class IdentitySets:
    """Usernames drawn from the two groups and the two principal lists.

    All four are plain sets; comparisons between them are set-based.
    """

    staff: set[str] = field(default_factory=set)
    root: set[str] = field(default_factory=set)
    admin_principals: set[str] = field(default_factory=set)  # holders of <user>/admin
    root_principals: set[str] = field(default_factory=set)   # holders of <user>/root


def principal_username(principal: str) -> str:
    """'bob/admin@REALM' → 'bob'."""
    return principal.split("/", 1)[0]
