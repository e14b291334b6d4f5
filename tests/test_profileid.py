import pytest

from authselect.profileid import CUSTOM_PREFIX, custom_id, is_custom, parse_custom


def test_custom_id_has_prefix():
    assert custom_id("mine") == CUSTOM_PREFIX + "mine"
    assert CUSTOM_PREFIX == "custom/"


@pytest.mark.parametrize("name", ["mine", "sssd", "a/b", ""])
def test_round_trip(name):
    profile_id = custom_id(name)
    assert parse_custom(profile_id) == name
    assert is_custom(profile_id) is True


@pytest.mark.parametrize("profile_id", ["sssd", "winbind", "customsssd", "Custom/x"])
def test_non_custom(profile_id):
    assert parse_custom(profile_id) is None
    assert is_custom(profile_id) is False


def test_none_is_not_custom():
    assert parse_custom(None) is None
    assert is_custom(None) is False


def test_prefix_only():
    assert parse_custom(CUSTOM_PREFIX) == ""
    assert is_custom(CUSTOM_PREFIX) is True