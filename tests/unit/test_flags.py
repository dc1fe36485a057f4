"""
Unit tests for modifier-flag parsing.
"""

import pytest

from macos_use.core.flags import FLAG_ALIASES, parse_modifier_flags
from macos_use.exceptions import ParameterError
from macos_use.models.actions import ModifierFlag, PressKey, combined_mask
from macos_use.models.enums import ParameterErrorKind
from macos_use.models.value import Value


class TestParseModifierFlags:
    """Tests for parse_modifier_flags."""

    def test_absent_means_no_flags(self):
        result = parse_modifier_flags(None)
        assert result.success
        assert result.unwrap() == frozenset()
        assert not result.has_warnings

    def test_non_array_means_no_flags(self):
        result = parse_modifier_flags(Value.of_string("cmd"))
        assert result.unwrap() == frozenset()

    def test_unknown_flag_is_dropped_with_warning(self):
        result = parse_modifier_flags(Value.from_json(["cmd", "bogus"]))

        assert result.unwrap() == frozenset({ModifierFlag.COMMAND})
        assert result.warnings == ["unknown modifier flag string 'bogus', ignoring"]

    def test_non_string_element_fails(self):
        with pytest.raises(ParameterError) as exc_info:
            parse_modifier_flags(Value.from_json(["cmd", 3]))

        assert exc_info.value.kind is ParameterErrorKind.WRONG_TYPE
        assert exc_info.value.field == "modifierFlags"

    def test_names_are_case_insensitive(self):
        result = parse_modifier_flags(Value.from_json(["Command", "SHIFT", "capsLock"]))
        assert result.unwrap() == frozenset(
            {ModifierFlag.COMMAND, ModifierFlag.SHIFT, ModifierFlag.CAPS_LOCK}
        )

    def test_duplicates_collapse(self):
        result = parse_modifier_flags(Value.from_json(["cmd", "command", "CMD"]))
        assert result.unwrap() == frozenset({ModifierFlag.COMMAND})

    @pytest.mark.parametrize(
        "alias,flag",
        [
            ("caps", ModifierFlag.CAPS_LOCK),
            ("ctrl", ModifierFlag.CONTROL),
            ("alt", ModifierFlag.OPTION),
            ("opt", ModifierFlag.OPTION),
            ("fn", ModifierFlag.FUNCTION),
            ("numpad", ModifierFlag.NUMERIC_PAD),
            ("help", ModifierFlag.HELP),
        ],
    )
    def test_abbreviations(self, alias, flag):
        assert parse_modifier_flags(Value.from_json([alias])).unwrap() == frozenset({flag})

    def test_every_flag_has_an_alias(self):
        assert set(FLAG_ALIASES.values()) == set(ModifierFlag)


class TestModifierMasks:
    """Tests for CoreGraphics mask folding."""

    def test_masks_are_distinct_bits(self):
        masks = [flag.mask for flag in ModifierFlag]
        assert len(set(masks)) == len(masks)
        assert all(bin(mask).count("1") == 1 for mask in masks)

    def test_combined_mask(self):
        flags = frozenset({ModifierFlag.COMMAND, ModifierFlag.SHIFT})
        assert combined_mask(flags) == 0x0010_0000 | 0x0002_0000
        assert PressKey(key_name="a", flags=flags).flags_mask == combined_mask(flags)

    def test_flags_serialize_sorted(self):
        press = PressKey(key_name="a", flags=frozenset({ModifierFlag.SHIFT, ModifierFlag.COMMAND}))
        assert press.model_dump(mode="json")["flags"] == ["command", "shift"]
