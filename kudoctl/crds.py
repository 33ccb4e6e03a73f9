"""Custom resource definitions that the KUDO manager implements and watches."""

from __future__ import annotations

from typing import Any

import yaml

GROUP = "kudo.dev"
CRD_VERSION = "v1alpha1"

_CRD_KIND = "CustomResourceDefinition"
_CRD_API_VERSION = "apiextensions.k8s.io/v1beta1"

Manifest = dict[str, Any]


def _labels(extra: dict[str, str]) -> dict[str, str]:
    return {**extra, "app": "kudo-manager"}


def _prop(
    type_: str,
    description: str | None = None,
    *,
    properties: dict[str, Manifest] | None = None,
    items: Manifest | None = None,
    required: list[str] | None = None,
) -> Manifest:
    """A JSON schema property, leaving out fields that are not set."""
    schema: Manifest = {"type": type_}
    if description:
        schema["description"] = description
    if properties:
        schema["properties"] = properties
    if items is not None:
        schema["items"] = items
    if required:
        schema["required"] = list(required)
    return schema


def _validation(spec_props: dict[str, Manifest], status: Manifest | None = None) -> Manifest:
    return {
        "openAPIV3Schema": _prop(
            "object",
            properties={
                "apiVersion": _prop("string"),
                "kind": _prop("string"),
                "meta": _prop("object"),
                "spec": _prop("object", properties=spec_props),
                "status": status if status is not None else _prop("object"),
            },
        )
    }


def _dependency_items() -> Manifest:
    return _prop(
        "object",
        required=["referenceName", "crdVersion"],
        properties={
            "referenceName": _prop(
                "string",
                "Name specifies the name of the dependency.  Referenced via this in defaults.config",
            ),
            "crdVersion": _prop(
                "string",
                "Version captures the requirements for what versions of the above object "
                "are allowed Example: ^3.1.4",
            ),
        },
    )


def generate_crd(kind: str, plural: str) -> Manifest:
    """A generic, namespaced CRD for ``kind`` in the KUDO group."""
    plural = plural.lower()
    return {
        "metadata": {
            "creationTimestamp": None,
            "name": f"{plural}.{GROUP}",
            "labels": _labels({"controller-tools.k8s.io": "1.0"}),
        },
        "spec": {
            "group": GROUP,
            "version": CRD_VERSION,
            "names": {
                "plural": plural,
                "singular": kind.lower(),
                "kind": kind,
            },
            "scope": "Namespaced",
        },
        "status": {
            "acceptedNames": {"kind": "", "plural": ""},
            "conditions": [],
            "storedVersions": [],
        },
    }


def generate_operator() -> Manifest:
    """The Operator CRD."""
    crd = generate_crd("Operator", "operators")
    maintainers = {"name": _prop("string"), "email": _prop("string")}
    spec_props = {
        "description": _prop("string"),
        "kubernetesVersion": _prop("string"),
        "kudoVersion": _prop("string"),
        "maintainers": _prop("array", items=_prop("object", properties=maintainers)),
        "url": _prop("string"),
    }
    crd["spec"]["validation"] = _validation(spec_props)
    return crd


def generate_operator_version() -> Manifest:
    """The OperatorVersion CRD."""
    crd = generate_crd("OperatorVersion", "operatorversions")
    param_props = {
        "default": _prop(
            "string", "Default is a default value if no parameter is provided by the instance"
        ),
        "description": _prop(
            "string",
            "Description captures a longer description of how the variable will be used",
        ),
        "displayName": _prop("string", "Human friendly crdVersion of the parameter name"),
        "name": _prop(
            "string",
            "Name is the string that should be used in the template file for example, "
            "if `name: COUNT` then using the variable `.Params.COUNT`",
        ),
        "required": _prop(
            "boolean",
            "Required specifies if the parameter is required to be provided by all "
            "instances, or whether a default can suffice",
        ),
        "trigger": _prop(
            "string",
            "Trigger identifies the plan that gets executed when this parameter changes "
            "in the Instance object. Default is `update` if present, or `deploy` if not present",
        ),
    }
    task_props = {
        "name": _prop("string"),
        "kind": _prop("string"),
        "spec": _prop("object"),
    }
    spec_props = {
        "connectionString": _prop(
            "string",
            "ConnectionString defines a mustached string that can be used to connect "
            "to an instance of the Operator",
        ),
        "dependencies": _prop("array", items=_dependency_items()),
        "operator": _prop("object"),
        "parameters": _prop("array", items=_prop("object", properties=param_props)),
        "plans": _prop("object", "Plans specify a map a plans that specify how to"),
        "tasks": _prop(
            "array",
            "List of all tasks available in this OperatorVersions",
            items=_prop("object", properties=task_props),
        ),
        "templates": _prop(
            "object",
            "List of go templates YAML files that define the application operator instance",
        ),
        "upgradableFrom": _prop(
            "array",
            "UpgradableFrom lists all OperatorVersions that can upgrade to this OperatorVersion",
            items=_prop("object"),
        ),
        "crdVersion": _prop("string"),
    }
    crd["spec"]["validation"] = _validation(spec_props)
    return crd


def generate_instance() -> Manifest:
    """The Instance CRD."""
    crd = generate_crd("Instance", "instances")
    spec_props = {
        "dependencies": _prop(
            "array", "Dependency references specific", items=_dependency_items()
        ),
        "OperatorVersion": _prop(
            "object", "Operator specifies a reference to a specific Operator object"
        ),
        "parameters": _prop("object"),
    }
    status = _prop(
        "object",
        properties={
            "planStatus": _prop("object"),
            "aggregatedStatus": _prop("object"),
        },
    )
    crd["spec"]["validation"] = _validation(spec_props, status)
    return crd


def _typed(crd: Manifest) -> Manifest:
    return {"apiVersion": _CRD_API_VERSION, "kind": _CRD_KIND, **crd}


def crds() -> list[Manifest]:
    """The Operator, OperatorVersion and Instance CRDs, ready for printing."""
    return [
        _typed(generate_operator()),
        _typed(generate_operator_version()),
        _typed(generate_instance()),
    ]


def crd_manifests() -> list[str]:
    """Each CRD rendered as a YAML document with keys in sorted order."""
    return [
        yaml.safe_dump(obj, sort_keys=True, default_flow_style=False) for obj in crds()
    ]