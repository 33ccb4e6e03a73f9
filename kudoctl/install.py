"""Validation helpers for installing operator packages."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass


class CommandError(Exception):
    """Raised when a command is invoked with invalid arguments or state."""


@dataclass(frozen=True)
class Parameter:
    """A parameter declared by an operator version."""

    name: str
    required: bool = False
    default: str | None = None


def validate_install_args(args: Sequence[str] | None) -> None:
    """Ensure exactly one package name or path was given."""
    if not args or len(args) != 1:
        raise CommandError(
            "expecting exactly one argument - name of the package or path to install"
        )


def version_exists(versions: Iterable[str], current_version: str) -> bool:
    """Return whether ``current_version`` is among ``versions``."""
    return current_version in versions


def missing_required_parameters(
    parameters: Iterable[Parameter],
    provided: Mapping[str, str] | None,
    skip_instance: bool,
) -> list[str]:
    """Names of required parameters with no default that were not provided.

    When no instance is going to be created there is nothing to check and
    the result is empty. Names keep the order in which they are declared.
    """
    if skip_instance:
        return []
    provided = provided or {}
    return [
        p.name
        for p in parameters
        if p.required and p.default is None and p.name not in provided
    ]