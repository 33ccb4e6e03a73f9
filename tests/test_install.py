import pytest

from kudoctl.install import (
    CommandError,
    Parameter,
    missing_required_parameters,
    validate_install_args,
    version_exists,
)

MESSAGE = "expecting exactly one argument - name of the package or path to install"


@pytest.mark.parametrize("args", [None, ["arg", "arg2"], []])
def test_validate_install_args_rejects(args):
    with pytest.raises(CommandError) as info:
        validate_install_args(args)
    assert str(info.value) == MESSAGE


def test_validate_install_args_accepts_one():
    assert validate_install_args(["zookeeper"]) is None


def test_version_exists():
    assert version_exists(["0.1.0", "1.0"], "1.0") is True
    assert version_exists(["0.1.0", "1.0"], "1.1") is False
    assert version_exists([], "1.0") is False


@pytest.mark.parametrize(
    "parameters, provided, skip, expected",
    [
        ([Parameter("param", True, "aaa")], {}, False, ""),
        ([Parameter("param", True)], {"param": "value"}, False, ""),
        ([Parameter("param", True, None)], {}, False, "param"),
        (
            [Parameter("param", True), Parameter("param2", True)],
            {},
            False,
            "param,param2",
        ),
        ([Parameter("param", True)], {}, True, ""),
    ],
)
def test_missing_required_parameters(parameters, provided, skip, expected):
    assert ",".join(missing_required_parameters(parameters, provided, skip)) == expected


def test_optional_parameters_are_never_missing():
    assert missing_required_parameters([Parameter("opt")], None, False) == []