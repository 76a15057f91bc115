"""Infrastructure faults — raised at source boundaries, never caught by rules."""

from __future__ import annotations


class SanityError(RuntimeError):
    """Base class for faults that abort a run."""


class DirectoryError(SanityError):
    """LDAP search failed or returned something unusable."""


class RegistryError(SanityError):
    """kadmin could not be run or exited non-zero."""


class RecordError(SanityError):
    """A directory entry is missing a required field or has a malformed one."""

    def __init__(self, dn: str, reason: str) -> None:
        super().__init__(f"{dn}: {reason}")
        self.dn = dn
        self.reason = reason
