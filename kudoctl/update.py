"""Validation of the instance update command."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from kudoctl.install import CommandError


def validate_update(
    args: Sequence[str] | None,
    instance_name: str,
    parameters: Mapping[str, str] | None,
) -> None:
    """Check that an update names an instance and at least one parameter."""
    if args:
        raise CommandError(
            "expecting no arguments provided for update. Only named flags are accepted"
        )
    if not instance_name:
        raise CommandError(
            "--instance flag has to be provided to indicate which instance you want to update"
        )
    if not parameters:
        raise CommandError(
            "need to specify at least one parameter to override via -p otherwise "
            "there is nothing to update"
        )