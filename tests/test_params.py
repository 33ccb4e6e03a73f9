import pytest

from kudoctl.params import ParameterError, get_parameter_map, parse_parameter


@pytest.mark.parametrize(
    "raw, message",
    [
        ("foo", "parameter not set: foo"),
        ("foo=", "parameter value can not be empty: foo="),
        ("=bar", "parameter name can not be empty: =bar"),
    ],
)
def test_parse_parameter_errors(raw, message):
    with pytest.raises(ParameterError) as info:
        parse_parameter(raw)
    assert str(info.value) == message


def test_parse_parameter_valid():
    assert parse_parameter("foo=bar") == ("foo", "bar")


def test_parse_parameter_keeps_extra_equals_in_value():
    assert parse_parameter("url=a=b") == ("url", "a=b")


def test_get_parameter_map_valid():
    assert get_parameter_map(["foo=bar", "fiz=buz"]) == {"foo": "bar", "fiz": "buz"}


def test_get_parameter_map_empty():
    assert get_parameter_map([]) == {}


def test_get_parameter_map_last_wins():
    assert get_parameter_map(["a=1", "a=2"]) == {"a": "2"}


@pytest.mark.parametrize(
    "raw",
    [["foo"], ["bar="], ["foo=bar", "fiz="], ["foo", "bar"]],
)
def test_get_parameter_map_rejects_bad_input(raw):
    with pytest.raises(ParameterError):
        get_parameter_map(raw)


def test_get_parameter_map_joins_all_errors():
    with pytest.raises(ParameterError) as info:
        get_parameter_map(["foo", "ok=1", "=x"])
    assert str(info.value) == (
        "parameter not set: foo, parameter name can not be empty: =x"
    )