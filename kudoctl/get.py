"""Validation of the ``get`` command."""

from __future__ import annotations

from collections.abc import Sequence

from kudoctl.install import CommandError


def validate_get_args(args: Sequence[str] | None) -> None:
    """Ensure the only argument is ``instances``."""
    if not args or len(args) != 1:
        raise CommandError('expecting exactly one argument - "instances"')
    if args[0] != "instances":
        raise CommandError(f'expecting "instances" and not "{args[0]}"')