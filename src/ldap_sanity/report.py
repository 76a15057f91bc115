"""Line rendering for violations: `[subject] message`, subject in bold red."""

from __future__ import annotations

import click

from ldap_sanity.model.violation import Report, Violation


def render(violation: Violation, color: bool = True) -> str:
    tag = f"[{violation.subject}]"
    if color:
        tag = click.style(tag, fg="red", bold=True)
    return f"{tag} {violation.message}"


def emit(report: Report, color: bool = True) -> None:
    for violation in report.violations:
        click.echo(render(violation, color=color))
