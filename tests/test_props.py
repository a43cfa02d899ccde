import pytest

from templater.core.exceptions import MalformedPropsError
from templater.core.props import extend_props, flatten_kvs, new_kvs_props


def test_new_kvs_props_pairs_arguments() -> None:
    assert new_kvs_props("title", "Hi", "count", 3) == {"title": "Hi", "count": 3}
    assert new_kvs_props() == {}


def test_keyword_arguments_follow_positional_pairs() -> None:
    assert new_kvs_props("a", 1, a=2, b=3) == {"a": 2, "b": 3}


def test_later_keys_win() -> None:
    assert new_kvs_props("a", 1, "a", 2) == {"a": 2}


def test_odd_argument_count() -> None:
    with pytest.raises(MalformedPropsError, match="received 3 arguments"):
        new_kvs_props("a", 1, "b")


def test_keys_must_be_strings() -> None:
    with pytest.raises(MalformedPropsError, match="argument 3 was a int"):
        new_kvs_props("a", 1, 2, "b")


def test_malformed_props_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        new_kvs_props("a")


def test_extend_props_copies() -> None:
    base = {"a": 1, "b": 2}
    extended = extend_props(base, {"b": 3, "c": 4})
    assert extended == {"a": 1, "b": 3, "c": 4}
    assert base == {"a": 1, "b": 2}


def test_flatten_kvs() -> None:
    assert flatten_kvs(("a", 1), {}) == ("a", 1)
    assert flatten_kvs(("a", 1), {"b": 2}) == ("a", 1, "b", 2)
