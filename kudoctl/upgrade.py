"""Validation of the operator upgrade command."""

from __future__ import annotations

import re
from collections.abc import Sequence

import semver

from kudoctl.install import CommandError

_VERSION_RE = re.compile(
    r"^v?(?P<major>[0-9]+)"
    r"(?:\.(?P<minor>[0-9]+))?"
    r"(?:\.(?P<patch>[0-9]+))?"
    r"(?:-(?P<prerelease>[0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*))?$"
)


def validate_upgrade(args: Sequence[str] | None, instance_name: str) -> None:
    """Check that an upgrade names exactly one package and an instance."""
    if not args or len(args) != 1:
        raise CommandError(
            "expecting exactly one argument - name of the package or path to upgrade"
        )
    if not instance_name:
        raise CommandError(
            "please use --instance and specify instance name. It cannot be empty"
        )


def _parse_version(text: str) -> semver.Version:
    """Parse a version leniently: missing minor and patch parts count as zero."""
    match = _VERSION_RE.match(text.strip())
    if match is None:
        raise CommandError(f"when parsing {text} as semver: Invalid Semantic Version")
    return semver.Version(
        int(match["major"]),
        int(match["minor"] or 0),
        int(match["patch"] or 0),
        match["prerelease"],
        match["build"],
    )


def check_upgrade_versions(
    current: str, proposed: str
) -> tuple[semver.Version, semver.Version]:
    """Ensure ``proposed`` is strictly newer than ``current``.

    Returns both versions parsed. Raises :class:`CommandError` when either
    cannot be parsed or when the proposed version is not an upgrade.
    """
    old = _parse_version(current)
    new = _parse_version(proposed)
    if not old < new:
        raise CommandError(
            f"upgraded version {proposed} is the same or smaller as current "
            f"version {current} -> not upgrading"
        )
    return old, new