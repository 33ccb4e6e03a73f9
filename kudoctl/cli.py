"""Command line entry point."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _distribution_version

from kudoctl.initcmd import DEFAULT_WAIT_TIMEOUT, InitCommand
from kudoctl.install import CommandError
from kudoctl.params import ParameterError
from kudoctl.settings import parse_settings

PROG = "kubectl-kudo"

_INIT_DESCRIPTION = """\
Installs KUDO onto your Kubernetes cluster and sets up local configuration in
$KUDO_HOME (default ~/.kudo/).

To set up just a local environment, use '--client-only'. To dump a manifest
containing the KUDO deployment YAML, combine '--dry-run' and '--output=yaml'.
Running init is idempotent: objects already present are skipped.
"""


def _version() -> str:
    try:
        return _distribution_version("kudoctl")
    except PackageNotFoundError:
        return "dev"


def _global_flags() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--home", default=argparse.SUPPRESS, help="location of your KUDO config."
    )
    parser.add_argument(
        "--kubeconfig",
        default=argparse.SUPPRESS,
        help="Path to your Kubernetes configuration file.",
    )
    parser.add_argument(
        "-n",
        "--namespace",
        default=argparse.SUPPRESS,
        help="Target namespace for the object.",
    )
    return parser


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for all commands."""
    flags = _global_flags()
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="CLI to manipulate, inspect and troubleshoot KUDO-specific CRDs.",
        parents=[flags],
    )
    parser.add_argument("--version", action="version", version=_version())
    sub = parser.add_subparsers(dest="command")

    init = sub.add_parser(
        "init",
        parents=[flags],
        help="Initialize KUDO on both the client and server",
        description=_INIT_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    init.add_argument("args", nargs="*", help=argparse.SUPPRESS)
    init.add_argument(
        "-c", "--client-only", action="store_true",
        help="If set does not install KUDO on the server",
    )
    init.add_argument(
        "-i", "--kudo-image", default="",
        help="Override KUDO controller image and/or version",
    )
    init.add_argument(
        "--version", dest="version", default="",
        help="Override KUDO controller version of the KUDO image",
    )
    init.add_argument("-o", "--output", default="", help="Output format")
    init.add_argument("--dry-run", action="store_true", help="Do not install local or remote")
    init.add_argument("--crd-only", action="store_true", help="Add only KUDO CRDs to your cluster")
    init.add_argument(
        "-w", "--wait", action="store_true",
        help="Block until KUDO manager is running and ready to receive requests",
    )
    init.add_argument(
        "--wait-timeout", type=int, default=None,
        help=f"Wait timeout to be used (default {DEFAULT_WAIT_TIMEOUT})",
    )

    sub.add_parser(
        "version",
        parents=[flags],
        help="Print the current KUDO package version.",
    )
    return parser


def _run_init(ns: argparse.Namespace, argv: Sequence[str]) -> None:
    if ns.args:
        raise CommandError("this command does not accept arguments")
    settings = parse_settings(argv, os.environ)
    cmd = InitCommand(
        out=sys.stdout,
        image=ns.kudo_image,
        dry_run=ns.dry_run,
        output=ns.output,
        version=ns.version,
        namespace=settings.namespace,
        wait=ns.wait,
        timeout=ns.wait_timeout if ns.wait_timeout is not None else DEFAULT_WAIT_TIMEOUT,
        client_only=ns.client_only,
        crd_only=ns.crd_only,
        home=settings.home,
        kubeconfig=settings.kubeconfig,
    )
    cmd.validate(timeout_changed=ns.wait_timeout is not None)
    cmd.run()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    ns = parser.parse_args(args)
    try:
        if ns.command == "init":
            _run_init(ns, args)
        elif ns.command == "version":
            print(f"KUDO Version: {_version()}")
        else:
            parser.print_help()
    except (CommandError, ParameterError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())