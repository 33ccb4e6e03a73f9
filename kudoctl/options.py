"""Configurable options for installing the KUDO manager, and its labels."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _distribution_version

DEFAULT_NAMESPACE = "kudo-system"
DEFAULT_GRACE_PERIOD = 10
IMAGE_REPOSITORY = "kudobuilder/controller"


def _installed_version() -> str:
    try:
        return _distribution_version("kudoctl")
    except PackageNotFoundError:
        return "dev"


@dataclass
class InitOptions:
    """Options controlling how the KUDO manager is installed.

    ``version`` must not carry a leading ``v`` (``0.5.0``, not ``v0.5.0``).
    """

    version: str
    namespace: str = DEFAULT_NAMESPACE
    termination_grace_period_seconds: int = DEFAULT_GRACE_PERIOD
    image: str = ""

    @classmethod
    def create(cls, version: str = "", namespace: str = "") -> InitOptions:
        """Options with defaults filled in for an empty version or namespace."""
        version = version or _installed_version()
        namespace = namespace or DEFAULT_NAMESPACE
        return cls(
            version=version,
            namespace=namespace,
            termination_grace_period_seconds=DEFAULT_GRACE_PERIOD,
            image=f"{IMAGE_REPOSITORY}:v{version}",
        )


def generate_labels(labels: Mapping[str, str]) -> dict[str, str]:
    """A copy of ``labels`` with the KUDO manager ``app`` label added."""
    return {**labels, "app": "kudo-manager"}


def manager_labels() -> dict[str, str]:
    """The labels identifying the KUDO manager and its pods."""
    return generate_labels(
        {"control-plane": "controller-manager", "controller-tools.k8s.io": "1.0"}
    )


def label_selector(labels: Mapping[str, str]) -> str:
    """An equality label selector matching all ``labels``, keys sorted."""
    return ",".join(f"{key}={labels[key]}" for key in sorted(labels))