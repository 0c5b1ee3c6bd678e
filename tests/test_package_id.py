import pytest

from plfront.syntax.package_id import (
    PackageID,
    PackageIDError,
    is_valid_identifier,
    parse_package_id,
)


@pytest.mark.parametrize("text", ["a/b", "a/b@v1.2", "pkg", "x/y/z@1"])
def test_parse_str_round_trip(text):
    assert str(parse_package_id(text)) == text


def test_parse_fields():
    pid = parse_package_id("a/b@v1")
    assert pid == PackageID("a/b", "v1")


def test_parse_without_version():
    assert parse_package_id("a/b").version == ""


@pytest.mark.parametrize(
    "text,name",
    [("x/y/zeta", "zeta"), ("solo", "solo"), ("a/b_c@v2", "b_c")],
)
def test_valid_ids_and_names(text, name):
    pid = parse_package_id(text)
    assert pid.name() == name
    assert pid.validate() is None


def test_error_is_value_error():
    with pytest.raises(ValueError):
        PackageID("/root").validate()


@pytest.mark.parametrize(
    "name,expected",
    [
        ("abc", True),
        ("_x1", True),
        ("_", True),
        ("", False),
        ("1abc", False),
        ("a-b", False),
        ("a.b", False),
    ],
)
def test_is_valid_identifier(name, expected):
    assert is_valid_identifier(name) is expected