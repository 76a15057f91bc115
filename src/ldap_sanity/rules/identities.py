"""Identity consistency rules — groups vs. Kerberos principals.

Cross-references the root group, the staff group and the /admin and /root
principal holders. All comparisons are set differences; output within each
rule is sorted by username.
"""

from __future__ import annotations

from ldap_sanity.config import IdentityRulesConfig
from ldap_sanity.model.identity import IdentitySets
from ldap_sanity.model.violation import Violation


def check(identities: IdentitySets, config: IdentityRulesConfig) -> list[Violation]:
    """Return identity violations in rule order."""
    admins = identities.admin_principals
    roots = identities.root_principals
    root_group = identities.root
    allowlist = set(config.admin_allowlist)

    violations: list[Violation] = []

    # /admin without /root; the allow-list applies to this direction only
    for user in sorted(admins - roots - allowlist):
        violations.append(Violation(f"{user}/admin", f"has no matching {user}/root principal"))

    for user in sorted(roots - admins):
        violations.append(Violation(f"{user}/root", f"has no matching {user}/admin principal"))

    for user in sorted(root_group - identities.staff):
        violations.append(
            Violation(user, f"in {config.root_group} but not {config.staff_group}")
        )

    for user in sorted(root_group - roots):
        violations.append(
            Violation(user, f"in {config.root_group} but has no {user}/root principal")
        )

    for user in sorted(root_group - admins):
        violations.append(
            Violation(user, f"in {config.root_group} but has no {user}/admin principal")
        )

    return violations
