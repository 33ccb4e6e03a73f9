"""The ``init`` command: local KUDO home setup and manager installation."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

import yaml

from kudoctl.crds import crd_manifests
from kudoctl.install import CommandError
from kudoctl.manager import (
    ObjectCreator,
    PodLister,
    install,
    manager_manifests,
    watch_kudo_until_ready,
)
from kudoctl.options import InitOptions
from kudoctl.prereqs import prereq_manifests
from kudoctl.settings import default_kudo_home

log = logging.getLogger(__name__)

DEFAULT_WAIT_TIMEOUT = 300
DEFAULT_REPOSITORY_NAME = "community"
DEFAULT_REPOSITORY_URL = "https://kudo-repository.storage.googleapis.com"
REPOSITORY_DIR = "repository"
REPOSITORY_FILE = "repositories.yaml"


def yaml_writer(out: TextIO, manifests: Iterable[str]) -> None:
    """Write each manifest as a YAML document, ending with the ``...`` marker."""
    for manifest in manifests:
        out.write("---\n")
        out.write(f"{manifest}\n")
    out.write("...\n")


def _ensure_directories(home: Path) -> None:
    for directory in (home, home / REPOSITORY_DIR):
        if directory.exists():
            log.debug("%s exists", directory)
            continue
        log.debug("creating %s", directory)
        try:
            directory.mkdir(mode=0o755, parents=True)
        except OSError as exc:
            raise CommandError(f"could not create {directory}: {exc}") from exc


def _ensure_repository_file(home: Path) -> None:
    path = home / REPOSITORY_DIR / REPOSITORY_FILE
    if path.exists():
        log.debug("%s exists", path)
        return
    log.debug("Creating %s", path)
    content = {
        "context": DEFAULT_REPOSITORY_NAME,
        "repositories": [
            {"name": DEFAULT_REPOSITORY_NAME, "url": DEFAULT_REPOSITORY_URL}
        ],
    }
    path.write_text(yaml.safe_dump(content, sort_keys=True), encoding="utf-8")
    path.chmod(0o644)


@dataclass
class InitCommand:
    """Initialise KUDO locally and, unless ``client_only``, on the cluster."""

    out: TextIO = field(default_factory=lambda: sys.stdout)
    image: str = ""
    dry_run: bool = False
    output: str = ""
    version: str = ""
    namespace: str = ""
    wait: bool = False
    timeout: float = DEFAULT_WAIT_TIMEOUT
    client_only: bool = False
    crd_only: bool = False
    home: str = field(default_factory=default_kudo_home)
    kubeconfig: str = ""
    client: ObjectCreator | None = None
    list_pods: PodLister | None = None
    poll_interval: float = 0.5

    def validate(self, timeout_changed: bool = False) -> None:
        """Reject flag combinations that make no sense together."""
        if self.image and self.version:
            raise CommandError("specify either 'kudo-image' or 'version', not both")
        if self.client_only and (
            self.image or self.version or self.output or self.crd_only or self.wait
        ):
            raise CommandError(
                "you cannot use image, version, output, crd-only and wait flags "
                "with client-only option"
            )
        if self.crd_only and self.wait:
            raise CommandError("wait is not allowed with crd-only")
        if timeout_changed and not self.wait:
            raise CommandError(
                "wait-timeout is only useful when using the flag '--wait'"
            )

    def _options(self) -> InitOptions:
        opts = InitOptions.create(self.version, self.namespace)
        if self.image:
            opts.image = self.image
        return opts

    def manifests(self) -> list[str]:
        """The YAML manifests that ``run`` would install, in install order."""
        opts = self._options()
        result = list(crd_manifests())
        if not self.crd_only:
            result.extend(prereq_manifests(opts))
            result.extend(manager_manifests(opts))
        return result

    def _initialize(self) -> None:
        home = Path(self.home)
        _ensure_directories(home)
        _ensure_repository_file(home)

    def run(self) -> None:
        """Print manifests if asked, then set up the local home and the cluster."""
        opts = self._options()

        if self.output.lower() == "yaml":
            yaml_writer(self.out, self.manifests())

        if self.dry_run:
            return

        try:
            self._initialize()
        except (CommandError, OSError) as exc:
            raise CommandError(f"error initializing: {exc}") from exc
        self.out.write(f"$KUDO_HOME has been configured at {self.home}\n")

        if self.client_only:
            return

        log.debug("initializing server")
        if self.client is None:
            raise CommandError(
                "could not get Kubernetes client: no client available for "
                f"kubeconfig {self.kubeconfig!r}"
            )
        try:
            install(self.client, opts, self.crd_only)
        except Exception as exc:
            raise CommandError(f"error installing: {exc}") from exc

        if self.wait:
            self.out.write("⌛Waiting for KUDO controller to be ready in your cluster...\n")
            if self.list_pods is None or not watch_kudo_until_ready(
                self.list_pods, opts, self.timeout, self.poll_interval
            ):
                raise CommandError("watch timed out, readiness uncertain")