"""The KUDO manager deployment and service, installation and readiness wait."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from typing import Any, Protocol

import yaml

from kudoctl.crds import Manifest, crds
from kudoctl.options import InitOptions, label_selector, manager_labels
from kudoctl.prereqs import prereq

log = logging.getLogger(__name__)

MANAGER_NAME = "kudo-controller-manager"
SERVICE_NAME = "kudo-controller-manager-service"
CONTAINER_NAME = "manager"
WEBHOOK_SECRET_NAME = "kudo-webhook-server-secret"

PodLister = Callable[[str, str], Iterable[Manifest]]


class AlreadyExistsError(Exception):
    """Raised by an :class:`ObjectCreator` when the object already exists."""


class ObjectCreator(Protocol):
    """Something that can create Kubernetes objects in a cluster."""

    def create(self, manifest: Manifest) -> Any:
        """Create the object; raise :class:`AlreadyExistsError` if it exists."""
        ...


def generate_deployment(opts: InitOptions) -> Manifest:
    """The stateful set running the KUDO manager."""
    cert_volume_source = dict(defaultMode=420, secretName=WEBHOOK_SECRET_NAME)
    return {
        "metadata": {
            "creationTimestamp": None,
            "labels": manager_labels(),
            "name": MANAGER_NAME,
            "namespace": opts.namespace,
        },
        "spec": {
            "selector": {"matchLabels": manager_labels()},
            "serviceName": SERVICE_NAME,
            "template": {
                "metadata": {
                    "creationTimestamp": None,
                    "labels": manager_labels(),
                },
                "spec": {
                    "containers": [
                        {
                            "command": ["/root/manager"],
                            "env": [
                                {
                                    "name": "POD_NAMESPACE",
                                    "valueFrom": {
                                        "fieldRef": {"fieldPath": "metadata.namespace"}
                                    },
                                },
                                {"name": "SECRET_NAME", "value": WEBHOOK_SECRET_NAME},
                            ],
                            "image": opts.image,
                            "imagePullPolicy": "Always",
                            "name": CONTAINER_NAME,
                            # the port name is what the service targets
                            "ports": [
                                {
                                    "containerPort": 9876,
                                    "name": "webhook-server",
                                    "protocol": "TCP",
                                }
                            ],
                            "resources": {
                                "requests": {"cpu": "100m", "memory": "50Mi"}
                            },
                            "volumeMounts": [
                                {
                                    "mountPath": "/tmp/cert",
                                    "name": "cert",
                                    "readOnly": True,
                                }
                            ],
                        }
                    ],
                    "serviceAccountName": "kudo-manager",
                    "terminationGracePeriodSeconds": opts.termination_grace_period_seconds,
                    "volumes": [
                        {
                            "name": "cert",
                            "secret": cert_volume_source,
                        }
                    ],
                },
            },
            "updateStrategy": {},
        },
        "status": {"replicas": 0},
    }


def generate_service(opts: InitOptions) -> Manifest:
    """The service exposing the manager's webhook server."""
    return {
        "metadata": {
            "creationTimestamp": None,
            "labels": manager_labels(),
            "name": SERVICE_NAME,
            "namespace": opts.namespace,
        },
        "spec": {
            "ports": [{"name": "kudo", "port": 443, "targetPort": "webhook-server"}],
            "selector": manager_labels(),
        },
        "status": {"loadBalancer": {}},
    }


def _manager_service(opts: InitOptions) -> Manifest:
    return {"apiVersion": "v1", "kind": "Service", **generate_service(opts)}


def _manager_deployment(opts: InitOptions) -> Manifest:
    return {"apiVersion": "apps/v1", "kind": "StatefulSet", **generate_deployment(opts)}


def manager_manifests(opts: InitOptions) -> list[str]:
    """The service and stateful set rendered as YAML documents."""
    return [
        yaml.safe_dump(obj, sort_keys=True, default_flow_style=False)
        for obj in (_manager_service(opts), _manager_deployment(opts))
    ]


def _create(client: ObjectCreator, manifest: Manifest, what: str) -> None:
    try:
        client.create(manifest)
    except AlreadyExistsError:
        log.debug("%s %s already exists", what, manifest["metadata"]["name"])


def install(client: ObjectCreator, opts: InitOptions, crd_only: bool = False) -> None:
    """Install the CRDs and, unless ``crd_only``, the prerequisites and manager.

    Objects that already exist are skipped, so installing is idempotent.
    """
    log.info("✅ installing crds")
    for crd in crds():
        _create(client, crd, "crd")
    if crd_only:
        return

    log.info("✅ preparing service accounts and other requirements for controller to run")
    for obj in prereq(opts):
        _create(client, obj, obj["kind"].lower())

    log.info("✅ installing kudo controller")
    _create(client, _manager_deployment(opts), "statefulset")
    _create(client, _manager_service(opts), "service")


def _is_pod_ready(pod: Manifest) -> bool:
    conditions = (pod.get("status") or {}).get("conditions") or []
    return any(
        c.get("type") == "Ready" and c.get("status") == "True" for c in conditions
    )


def get_kudo_pod_image(pods: PodLister, namespace: str) -> str:
    """Image of the manager container in the first ready KUDO pod.

    ``pods`` is called with the namespace and a label selector and returns
    pod manifests. Raises :class:`LookupError` if no suitable pod is found.
    """
    found = list(pods(namespace, label_selector(manager_labels())))
    if not found:
        raise LookupError("could not find KUDO manager")
    ready = next((p for p in found if _is_pod_ready(p)), None)
    if ready is None:
        raise LookupError("could not find a ready KUDO pod")
    for container in ready.get("spec", {}).get("containers", []):
        if container.get("name") == CONTAINER_NAME:
            return container.get("image", "")
    raise LookupError("could not find a KUDO pod")


def watch_kudo_until_ready(
    list_pods: PodLister,
    opts: InitOptions,
    timeout: float,
    interval: float = 0.5,
) -> bool:
    """Poll until a ready KUDO pod runs the expected image.

    Returns True once found, False if ``timeout`` seconds pass first.
    """
    deadline = time.monotonic() + timeout
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return False
        time.sleep(min(interval, remaining))
        if time.monotonic() > deadline:
            return False
        try:
            image = get_kudo_pod_image(list_pods, opts.namespace)
        except Exception as exc:  # any listing failure just means "not yet"
            log.debug("KUDO pod not ready: %s", exc)
            continue
        if image == opts.image:
            return True