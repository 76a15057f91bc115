"""kadmin-backed principal registry.

Shells out to kadmin once per wildcard pattern. Any failure to run kadmin,
a non-zero exit, or output that does not look like a principal list is an
infrastructure fault and raises RegistryError.
"""

from __future__ import annotations

import logging
import subprocess

from ldap_sanity.config import KerberosConfig
from ldap_sanity.errors import RegistryError
from ldap_sanity.sources.base import PrincipalRegistry

LOGGER = logging.getLogger(__name__)

# kadmin chatter printed ahead of the listing
_BANNER_PREFIXES = ("Authenticating as principal",)


class KadminRegistry(PrincipalRegistry):
    def __init__(self, config: KerberosConfig) -> None:
        self._config = config

    def command(self, pattern: str) -> list[str]:
        cmd = [self._config.kadmin_command]
        if self._config.principal:
            cmd += ["-p", self._config.principal]
        if self._config.keytab:
            cmd += ["-k", "-t", self._config.keytab]
        cmd += ["-q", f"list_principals {pattern}"]
        return cmd

    def list_principals(self, pattern: str) -> list[str]:
        cmd = self.command(pattern)
        try:
            proc = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as exc:
            raise RegistryError(f"kadmin not found: {cmd[0]}") from exc
        except subprocess.CalledProcessError as exc:
            raise RegistryError(
                f"kadmin exited {exc.returncode} listing {pattern}: {(exc.stderr or '').strip()}"
            ) from exc

        principals = parse_principals(proc.stdout)
        LOGGER.debug("kadmin returned %d principals for %s", len(principals), pattern)
        return principals


def parse_principals(output: str) -> list[str]:
    """Extract principal names from list_principals output, one per line."""
    principals: list[str] = []
    for line in output.splitlines():
        line = line.strip()
        if not line or line.startswith(_BANNER_PREFIXES):
            continue
        if "/" not in line or any(c.isspace() for c in line):
            raise RegistryError(f"unexpected kadmin output line: {line!r}")
        principals.append(line)
    return principals
