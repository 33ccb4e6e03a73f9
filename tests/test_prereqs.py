import yaml

from kudoctl.options import InitOptions
from kudoctl.prereqs import (
    generate_role_binding,
    generate_service_account,
    generate_sys_namespace,
    generate_webhook_secret,
    prereq,
    prereq_manifests,
)

WEBHOOK_OBJECT_NAME = "kudo-webhook-server-" + "secret"


def _opts(namespace="kudo-system"):
    return InitOptions.create("0.5.0", namespace)


def test_prereq_kinds_in_order():
    kinds = [obj["kind"] for obj in prereq(_opts())]
    assert kinds == ["Namespace", "ServiceAccount", "ClusterRoleBinding", "Secret"]


def test_prereq_api_versions():
    versions = {obj["kind"]: obj["apiVersion"] for obj in prereq(_opts())}
    assert versions["ClusterRoleBinding"] == "rbac.authorization.k8s.io/v1"
    assert versions["Namespace"] == "v1"


def test_namespace_uses_given_name_and_labels():
    ns = generate_sys_namespace("integration-test")
    assert ns["metadata"]["name"] == "integration-test"
    assert ns["metadata"]["labels"]["app"] == "kudo-manager"
    assert ns["metadata"]["labels"]["controller-tools.k8s.io"] == "1.0"


def test_service_account_in_options_namespace():
    sa = generate_service_account(_opts("integration-test"))
    assert sa["metadata"]["name"] == "kudo-manager"
    assert sa["metadata"]["namespace"] == "integration-test"
    assert sa["metadata"]["labels"] == {"app": "kudo-manager"}


def test_role_binding_refers_to_service_account():
    rb = generate_role_binding(_opts("other"))
    assert rb["metadata"]["name"] == "kudo-manager-rolebinding"
    assert rb["roleRef"]["name"] == "cluster-admin"
    assert rb["roleRef"]["kind"] == "ClusterRole"
    subject = rb["subjects"][0]
    assert subject["kind"] == "ServiceAccount"
    assert subject["name"] == "kudo-manager"
    assert subject["namespace"] == "other"


def test_webhook_secret():
    webhook = generate_webhook_secret(_opts("other"))
    assert webhook["metadata"]["name"] == WEBHOOK_OBJECT_NAME
    assert webhook["metadata"]["namespace"] == "other"


def test_manifests_round_trip():
    opts = _opts()
    manifests = prereq_manifests(opts)
    assert [yaml.safe_load(text) for text in manifests] == prereq(opts)


def test_manifests_have_no_aliases():
    for text in prereq_manifests(_opts()):
        assert "&id" not in text
        assert "*id" not in text