"""Global settings shared by all commands: flags with environment fallbacks."""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

# Maps settings to the environment variables that may supply them.
_ENV_MAP = {
    "home": "KUDO_HOME",
    "kubeconfig": "KUBECONFIG",
}


def default_kudo_home() -> str:
    """The default KUDO home directory, ``~/.kudo``."""
    return os.path.join(str(Path.home()), ".kudo")


def _default_kubeconfig() -> str:
    return os.environ.get("HOME", "") + "/.kube/config"


@dataclass
class Settings:
    """Global settings for talking to a cluster and locating local config."""

    kubeconfig: str = ""
    home: str = ""
    namespace: str = "default"


def _settings_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    parser.add_argument("--home", default=None)
    parser.add_argument("--kubeconfig", default=None)
    parser.add_argument("-n", "--namespace", default="default")
    return parser


def parse_settings(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build settings from command line flags, falling back to the environment.

    A flag given on the command line always wins over its environment
    variable; arguments that are not global settings are ignored.
    """
    if environ is None:
        environ = os.environ
    known, _ = _settings_parser().parse_known_args(list(argv or []))
    defaults = {"home": default_kudo_home(), "kubeconfig": _default_kubeconfig()}

    values: dict[str, str] = {}
    for name, envar in _ENV_MAP.items():
        flag_value = getattr(known, name)
        if flag_value is not None:
            values[name] = flag_value
        elif envar in environ:
            values[name] = environ[envar]
        else:
            values[name] = defaults[name]

    return Settings(
        kubeconfig=values["kubeconfig"],
        home=values["home"],
        namespace=known.namespace,
    )