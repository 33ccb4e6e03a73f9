import pytest

from kudoctl.install import CommandError
from kudoctl.update import validate_update


@pytest.mark.parametrize(
    "args, instance, parameters, fragment",
    [
        (["aaa"], "instance", {"param": "value"}, "expecting no arguments provided"),
        ([], "", {}, "--instance flag has to be provided"),
        ([], "instance", {}, "need to specify at least one parameter to override "),
    ],
)
def test_validate_update_errors(args, instance, parameters, fragment):
    with pytest.raises(CommandError) as info:
        validate_update(args, instance, parameters)
    assert fragment in str(info.value)


def test_validate_update_missing_parameters_none():
    with pytest.raises(CommandError) as info:
        validate_update(None, "instance", None)
    assert str(info.value).startswith("need to specify at least one parameter")


def test_validate_update_accepts_valid():
    assert validate_update([], "dev-flink", {"param": "value"}) is None