"""ldap-sanity command-line entry point.

One run: open the directory, fetch a snapshot, evaluate the rules, print
one line per violation, exit 0 if clean and 1 otherwise. Infrastructure
faults are not caught; they surface as a traceback and a non-zero exit.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from ldap_sanity.checker import SanityChecker
from ldap_sanity.config import load_config
from ldap_sanity.report import emit
from ldap_sanity.sources.directory import open_directory
from ldap_sanity.sources.kerberos import KadminRegistry
from ldap_sanity.sources.resolver import DnsResolver
from ldap_sanity.sources.snapshot import load_snapshot

LOGGER = logging.getLogger(__name__)


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: config/sanity.yaml).",
)
@click.option("--no-color", is_flag=True, help="Plain output, no bold/red subject tags.")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging on stderr.")
@click.option("--skip-hosts", is_flag=True, help="Do not run the host rules.")
@click.option("--skip-identities", is_flag=True, help="Do not run the group/principal rules.")
def cli(
    config_path: Path | None,
    no_color: bool,
    verbose: bool,
    skip_hosts: bool,
    skip_identities: bool,
) -> None:
    """Check LDAP hosts, groups and Kerberos principals for inconsistencies."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(config_path)
    if skip_hosts:
        config.hosts.enabled = False
    if skip_identities:
        config.identities.enabled = False
    if not (config.hosts.enabled or config.identities.enabled):
        LOGGER.info("every rule set is disabled, nothing to check")
        sys.exit(0)

    with open_directory(config.ldap, config.hosts.legacy_attributes) as directory:
        snapshot = load_snapshot(
            directory,
            KadminRegistry(config.kerberos),
            config,
            include_hosts=config.hosts.enabled,
            include_identities=config.identities.enabled,
        )
        report = SanityChecker(DnsResolver(config.dns), config).run(snapshot)

    emit(report, color=not no_color)
    LOGGER.info("%d violations", len(report))
    sys.exit(report.exit_code)


if __name__ == "__main__":
    cli()
