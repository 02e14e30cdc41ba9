"""Tests for guard tag construction."""

import dataclasses

import pytest

from guardtags.errors import ArgumentError, ArgumentInvalidError, ArgumentMissingError
from guardtags.tags import GuardTag


class TestGroupValidation:
    """Test the required group argument."""

    def test_missing_group_is_rejected(self):
        with pytest.raises(ArgumentMissingError) as exc_info:
            GuardTag(None)
        assert exc_info.value.param_name == "group"

    def test_omitted_group_is_a_call_error(self):
        with pytest.raises(TypeError):
            GuardTag()

    @pytest.mark.parametrize("group", ["", " ", "\t\n"])
    def test_blank_group_is_invalid(self, group):
        with pytest.raises(ArgumentInvalidError) as exc_info:
            GuardTag(group)
        assert exc_info.value.param_name == "group"
        assert not isinstance(exc_info.value, ArgumentMissingError)

    def test_non_string_group_is_invalid(self):
        with pytest.raises(ArgumentInvalidError) as exc_info:
            GuardTag(42)
        assert exc_info.value.param_name == "group"

    def test_missing_and_invalid_are_distinct_argument_errors(self):
        assert issubclass(ArgumentMissingError, ArgumentError)
        assert issubclass(ArgumentInvalidError, ArgumentError)
        assert not issubclass(ArgumentMissingError, ArgumentInvalidError)
        assert issubclass(ArgumentError, ValueError)


class TestShortcutValidation:
    """Test the optional shortcut argument."""

    @pytest.mark.parametrize("shortcut", ["", " ", "s", "g"])
    def test_malformed_shortcut_is_invalid(self, shortcut):
        with pytest.raises(ArgumentInvalidError) as exc_info:
            GuardTag("G", shortcut)
        assert exc_info.value.param_name == "shortcut"

    def test_two_character_shortcut_is_accepted(self):
        tag = GuardTag("G", "gs")
        assert tag.shortcut == "gs"

    def test_shortcut_case_is_preserved(self):
        assert GuardTag("G", "GnN").shortcut == "GnN"

    def test_error_message_names_parameter(self):
        with pytest.raises(ValueError, match="shortcut"):
            GuardTag("G", "x")


class TestDefaults:
    """Test accessor values of constructed tags."""

    def test_group_only(self):
        tag = GuardTag("G")
        assert tag.group == "G"
        assert tag.shortcut is None
        assert tag.order == 0

    def test_group_and_shortcut(self):
        tag = GuardTag("G", "gs")
        assert (tag.group, tag.shortcut, tag.order) == ("G", "gs", 0)

    def test_group_and_order(self):
        tag = GuardTag("G", order=1)
        assert (tag.group, tag.shortcut, tag.order) == ("G", None, 1)

    def test_all_fields(self):
        tag = GuardTag("G", "gs", order=1)
        assert (tag.group, tag.shortcut, tag.order) == ("G", "gs", 1)

    def test_negative_order_is_allowed(self):
        assert GuardTag("G", order=-3).order == -3

    @pytest.mark.parametrize("order", [True, 1.5, "1", None])
    def test_non_integer_order_is_invalid(self, order):
        with pytest.raises(ArgumentInvalidError) as exc_info:
            GuardTag("G", order=order)
        assert exc_info.value.param_name == "order"


class TestImmutability:
    """Test that tags never change after construction."""

    def test_fields_cannot_be_assigned(self):
        tag = GuardTag("G", "gs", order=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            tag.group = "H"
        with pytest.raises(dataclasses.FrozenInstanceError):
            tag.shortcut = "gx"
        assert tag == GuardTag("G", "gs", order=1)

    def test_tags_are_hashable_values(self):
        assert len({GuardTag("G", "gs"), GuardTag("G", "gs"), GuardTag("G")}) == 2
