from kudoctl.options import (
    DEFAULT_GRACE_PERIOD,
    DEFAULT_NAMESPACE,
    InitOptions,
    generate_labels,
    label_selector,
    manager_labels,
)


def test_create_fills_default_namespace():
    opts = InitOptions.create("0.5.0", "")
    assert opts.namespace == "kudo-system"
    assert opts.namespace == DEFAULT_NAMESPACE


def test_create_keeps_given_namespace():
    opts = InitOptions.create("0.5.0", "integration-test")
    assert opts.namespace == "integration-test"


def test_create_image_from_version():
    opts = InitOptions.create("0.5.0", "")
    assert opts.image == "kudobuilder/controller:v0.5.0"
    assert opts.version == "0.5.0"


def test_create_grace_period_default():
    opts = InitOptions.create("1.0.0", "ns")
    assert opts.termination_grace_period_seconds == DEFAULT_GRACE_PERIOD


def test_create_without_version_uses_some_version():
    opts = InitOptions.create("", "")
    assert opts.version
    assert opts.image.endswith(":v" + opts.version)


def test_generate_labels_adds_app_and_does_not_mutate():
    original = {"controller-tools.k8s.io": "1.0"}
    labels = generate_labels(original)
    assert labels == {"controller-tools.k8s.io": "1.0", "app": "kudo-manager"}
    assert original == {"controller-tools.k8s.io": "1.0"}


def test_manager_labels():
    labels = manager_labels()
    assert labels["control-plane"] == "controller-manager"
    assert labels["app"] == "kudo-manager"
    assert labels["controller-tools.k8s.io"] == "1.0"


def test_manager_labels_are_fresh_each_call():
    first = manager_labels()
    first["extra"] = "x"
    assert "extra" not in manager_labels()


def test_label_selector_round_trip_and_sorted():
    labels = manager_labels()
    selector = label_selector(labels)
    pairs = selector.split(",")
    keys = [pair.split("=", 1)[0] for pair in pairs]
    assert keys == sorted(keys)
    assert dict(pair.split("=", 1) for pair in pairs) == labels


def test_label_selector_empty():
    assert label_selector({}) == ""