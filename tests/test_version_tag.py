import pytest

from services.exceptions import VersionInvalidError
from services.version_tag import VersionTag


@pytest.mark.parametrize("text, value", [('"0"', 0), ('"5"', 5), ('"123"', 123)])
def test_parse_quoted_integer(text, value):
    assert VersionTag.parse(text).value == value


@pytest.mark.parametrize("text", ["abc", "5", '"1234"', '""', '"5"x', '"-1"', "'5'", None])
def test_malformed_tags_are_rejected(text):
    with pytest.raises(VersionInvalidError):
        VersionTag.parse(text)


def test_str_is_the_wire_form():
    assert str(VersionTag.of(7)) == '"7"'
