"""Prerequisites for running the KUDO manager: namespace, account, RBAC, secret."""

from __future__ import annotations

import yaml

from kudoctl.crds import Manifest
from kudoctl.options import InitOptions, generate_labels

SERVICE_ACCOUNT_NAME = "kudo-manager"
ROLE_BINDING_NAME = "kudo-manager-rolebinding"
WEBHOOK_SECRET_NAME = "kudo-webhook-server-secret"


def generate_sys_namespace(namespace: str) -> Manifest:
    """The namespace the manager runs in."""
    return {
        "metadata": {
            "creationTimestamp": None,
            "labels": generate_labels({"controller-tools.k8s.io": "1.0"}),
            "name": namespace,
        },
        "spec": {},
        "status": {},
    }


def generate_service_account(opts: InitOptions) -> Manifest:
    """The service account the manager runs as."""
    return {
        "metadata": {
            "creationTimestamp": None,
            "labels": generate_labels({}),
            "name": SERVICE_ACCOUNT_NAME,
            "namespace": opts.namespace,
        },
    }


def generate_role_binding(opts: InitOptions) -> Manifest:
    """A cluster role binding granting the manager's account cluster-admin."""
    return {
        "metadata": {
            "creationTimestamp": None,
            "name": ROLE_BINDING_NAME,
        },
        "roleRef": {
            "apiGroup": "rbac.authorization.k8s.io",
            "kind": "ClusterRole",
            "name": "cluster-admin",
        },
        "subjects": [
            {
                "kind": "ServiceAccount",
                "name": SERVICE_ACCOUNT_NAME,
                "namespace": opts.namespace,
            }
        ],
    }


def generate_webhook_secret(opts: InitOptions) -> Manifest:
    """The (initially empty) secret used by the manager's webhook server."""
    return {
        "metadata": {
            "creationTimestamp": None,
            "name": WEBHOOK_SECRET_NAME,
            "namespace": opts.namespace,
        },
    }


def _typed(kind: str, api_version: str, manifest: Manifest) -> Manifest:
    return {"apiVersion": api_version, "kind": kind, **manifest}


def prereq(opts: InitOptions) -> list[Manifest]:
    """Namespace, service account, role binding and secret, ready for printing."""
    return [
        _typed("Namespace", "v1", generate_sys_namespace(opts.namespace)),
        _typed("ServiceAccount", "v1", generate_service_account(opts)),
        _typed(
            "ClusterRoleBinding",
            "rbac.authorization.k8s.io/v1",
            generate_role_binding(opts),
        ),
        _typed("Secret", "v1", generate_webhook_secret(opts)),
    ]


def prereq_manifests(opts: InitOptions) -> list[str]:
    """Each prerequisite rendered as a YAML document with keys in sorted order."""
    return [
        yaml.safe_dump(obj, sort_keys=True, default_flow_style=False)
        for obj in prereq(opts)
    ]