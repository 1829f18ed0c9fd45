"""ConfigValidator tests: violations, warnings and defaults"""
import pytest

from cmdrunner.core.services.config import (
    PLACEHOLDER_COMMAND,
    PLACEHOLDER_LABEL,
    CommandEntry,
    ConfigValidator,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def validator():
    return ConfigValidator()


class TestValidateConfig:
    """Hard issues versus soft warnings"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ([], "Settings root must be a JSON object, found array."),
            (None, "Settings root must be a JSON object, found null."),
            ({}, 'Settings missing "commands" array.'),
            ({"commands": {}}, '"commands" must be an array, found object.'),
            ({"commands": 3}, '"commands" must be an array, found number.'),
        ],
    )
    def test_structural_issues(self, validator, raw, expected):
        report = validator.validate_config(raw)
        assert report["issues"] == [expected]

    def test_empty_commands_list_is_valid(self, validator):
        assert validator.validate_config({"commands": []}) == {"issues": [], "warnings": [], "entries": []}

    def test_entry_problems_are_warnings(self, validator):
        """Missing fields never fail validation"""
        report = validator.validate_config(
            {"commands": [{}, {"label": "A"}, "text", {"label": "B", "command": "b", "group": 5}]}
        )

        assert report["issues"] == []
        assert report["warnings"] == [
            "command and label fields missing for entry at index 0",
            "command field missing for entry at index 1",
            "entry at index 2 is not an object; using placeholders.",
            "group of entry at index 3 is not a name; placing it at the root",
        ]

    def test_missing_fields_are_reported_for_the_user(self, validator):
        """Group problems stay in the log; missing label/command are listed"""
        result = validator.normalize(
            {"commands": [{"command": "a"}, {"label": "B", "command": "b", "group": ""}]}
        )

        assert result.is_valid
        assert result.entry_warnings == ["label field missing for entry at index 0"]
        assert len(result.warnings) == 2

    def test_bad_dark_theme_is_a_warning(self, validator):
        report = validator.validate_config({"general": {"darkTheme": "yes"}, "commands": []})
        assert report["issues"] == []
        assert report["warnings"] == ['"general.darkTheme" is not true/false; using default.']


class TestNormalize:
    """Normalized configuration contents"""

    def test_entries_keep_authored_order(self, validator):
        result = validator.normalize(
            {"commands": [{"label": "B", "command": "b"}, {"label": "A", "command": "a", "group": "G"}]}
        )

        assert result.config.commands == [
            CommandEntry("B", "b"),
            CommandEntry("A", "a", "G"),
        ]

    def test_non_object_entry_becomes_placeholder(self, validator):
        result = validator.normalize({"commands": [42]})

        assert result.is_valid
        assert result.config.commands == [CommandEntry(PLACEHOLDER_LABEL, PLACEHOLDER_COMMAND)]
        assert result.warnings

    @pytest.mark.parametrize("label", ["", "   ", 7, None])
    def test_unusable_label_gets_placeholder(self, validator, label):
        result = validator.normalize({"commands": [{"label": label, "command": "x"}]})
        assert result.config.commands[0].label == PLACEHOLDER_LABEL

    @pytest.mark.parametrize("group", ["", 0, [], None])
    def test_unusable_group_goes_to_root(self, validator, group):
        result = validator.normalize({"commands": [{"label": "A", "command": "a", "group": group}]})
        assert result.config.commands[0].group is None

    def test_dark_theme_read_from_general(self, validator):
        assert validator.normalize({"general": {"darkTheme": True}, "commands": []}).config.dark_theme is True
        assert validator.normalize({"commands": []}).config.dark_theme is False

    def test_violation_empties_commands(self, validator):
        result = validator.normalize({"commands": "echo hi"})

        assert not result.is_valid
        assert result.config.commands == []
