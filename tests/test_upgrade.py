import pytest

from kudoctl.install import CommandError
from kudoctl.upgrade import check_upgrade_versions, validate_upgrade


@pytest.mark.parametrize(
    "args, instance, message",
    [
        ([], "instance", "expecting exactly one argument - name of the package or path to upgrade"),
        (["aaa", "bbb"], "instance", "expecting exactly one argument - name of the package or path to upgrade"),
        (["arg"], "", "please use --instance and specify instance name. It cannot be empty"),
    ],
)
def test_validation_errors(args, instance, message):
    with pytest.raises(CommandError) as excinfo:
        validate_upgrade(args, instance)
    assert str(excinfo.value) == message


def test_validation_none_args():
    with pytest.raises(CommandError, match="expecting exactly one argument"):
        validate_upgrade(None, "instance")


def test_validation_accepts_valid_input():
    assert validate_upgrade(["flink"], "dev-flink") is None


@pytest.mark.parametrize(
    "proposed, message",
    [
        ("1.0", "upgraded version 1.0 is the same or smaller"),
        ("0.1", "upgraded version 0.1 is the same or smaller"),
    ],
)
def test_not_an_upgrade(proposed, message):
    with pytest.raises(CommandError) as excinfo:
        check_upgrade_versions("1.0", proposed)
    assert message in str(excinfo.value)
    assert str(excinfo.value).endswith("-> not upgrading")


def test_valid_upgrade():
    old, new = check_upgrade_versions("1.0", "1.1.1")
    assert (old.major, old.minor, old.patch) == (1, 0, 0)
    assert (new.major, new.minor, new.patch) == (1, 1, 1)
    assert old < new


def test_prefix_v_accepted():
    old, new = check_upgrade_versions("v1.0.0", "v2")
    assert new.major == 2
    assert old < new


def test_prerelease_is_lower_than_release():
    _, new = check_upgrade_versions("1.0.0-alpha", "1.0.0")
    assert new.prerelease is None


def test_invalid_version():
    with pytest.raises(CommandError, match="when parsing abc as semver"):
        check_upgrade_versions("1.0", "abc")