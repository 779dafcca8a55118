#!/usr/bin/env python3
"""Tests for the alias table builder."""

import os

import pytest

from pathalias.errors import ConfigShapeError, InvalidConfigShape
from pathalias.table import AliasPattern, AliasTable, MultiTarget, SingleTarget, build


class TestAliasPattern:
    """Tests for AliasPattern parsing and matching."""

    def test_exact_pattern(self):
        """Exact patterns match by equality only."""
        pattern = AliasPattern.parse("@config")
        assert not pattern.is_wildcard
        assert pattern.matches("@config") == ""
        assert pattern.matches("@config/dev") is None
        assert pattern.matches("x@config") is None

    def test_wildcard_prefix(self):
        """Test wildcard pattern with a prefix only."""
        pattern = AliasPattern.parse("@/*")
        assert pattern.is_wildcard
        assert pattern.prefix == "@/"
        assert pattern.suffix == ""
        assert pattern.matches("@/utils") == "utils"
        assert pattern.matches("@/components/Button") == "components/Button"
        assert pattern.matches("~/utils") is None

    def test_wildcard_prefix_and_suffix(self):
        """Both ends of the pattern are anchored."""
        pattern = AliasPattern.parse("@styles/*.css")
        assert pattern.matches("@styles/main.css") == "main"
        assert pattern.matches("@styles/main.scss") is None
        assert pattern.matches("lib/@styles/main.css") is None

    def test_empty_capture(self):
        """The wildcard may capture nothing."""
        pattern = AliasPattern.parse("@app/*")
        assert pattern.matches("@app/") == ""

    def test_prefix_and_suffix_do_not_overlap(self):
        """A specifier shorter than prefix + suffix does not match."""
        pattern = AliasPattern.parse("ab*ba")
        assert pattern.matches("aba") is None
        assert pattern.matches("abba") == ""

    def test_two_wildcards_rejected(self):
        """Patterns may contain at most one wildcard."""
        with pytest.raises(ConfigShapeError, match="at most one"):
            AliasPattern.parse("@/*/*")


class TestBuild:
    """Tests for build()."""

    def test_single_string_target(self):
        """A string value becomes a SingleTarget joined onto base_dir."""
        table = build("src", {"@config": "config/index"})
        entry = table.lookup("@config")
        assert isinstance(entry.targets, SingleTarget)
        assert entry.targets.candidates == (os.path.join("src", "config/index"),)

    def test_sequence_target(self):
        """A list value becomes a MultiTarget, order preserved."""
        table = build("/project/src", {"@app/*": ["app/*", "legacy/*"]})
        entry = table.lookup("@app/*")
        assert isinstance(entry.targets, MultiTarget)
        assert entry.targets.candidates == (
            os.path.join("/project/src", "app/*"),
            os.path.join("/project/src", "legacy/*"),
        )

    def test_tuple_target(self):
        """Tuples are accepted like lists."""
        table = build("src", {"@a/*": ("a/*",)})
        assert isinstance(table.lookup("@a/*").targets, MultiTarget)

    def test_empty_base_dir(self):
        """An empty base dir leaves targets untouched."""
        table = build("", {"@a/*": ["lib/a/*"]})
        assert table.lookup("@a/*").targets.candidates == ("lib/a/*",)

    def test_declared_order(self):
        """Aliases keep their declaration order."""
        table = build("src", {"@b/*": "b/*", "@a/*": "a/*", "@c": "c"})
        assert list(table) == ["@b/*", "@a/*", "@c"]
        assert len(table) == 3
        assert "@a/*" in table
        assert "@d" not in table

    def test_to_dict(self):
        """to_dict gives a plain view of the candidates."""
        table = build("", {"@a/*": "a/*", "@b/*": ["b/*", "c/*"]})
        assert table.to_dict() == {"@a/*": ["a/*"], "@b/*": ["b/*", "c/*"]}

    def test_deterministic(self):
        """Same input, same table."""
        raw = {"@a/*": ["a/*", "b/*"], "@c": "c"}
        assert build("src", raw) == build("src", raw)

    @pytest.mark.parametrize(
        "value",
        [42, None, {"a": "b"}, [], ["ok/*", 3], 1.5],
    )
    def test_bad_shapes(self, value):
        """Anything but a string or non-empty list of strings is rejected."""
        with pytest.raises(ConfigShapeError):
            build("src", {"@a/*": value})

    def test_error_message_names_alias_and_type(self):
        """Test the error message for a bad value type."""
        with pytest.raises(InvalidConfigShape, match=r"'@a/\*': int"):
            build("src", {"@a/*": 42})

    def test_target_with_two_wildcards(self):
        """Targets may contain at most one wildcard."""
        with pytest.raises(ConfigShapeError, match="at most one"):
            build("src", {"@a/*": ["a/*/*"]})

    def test_non_mapping_rejected(self):
        """The raw paths must be a mapping."""
        with pytest.raises(ConfigShapeError):
            build("src", [("@a/*", "a/*")])


class TestAliasTable:
    """Tests for AliasTable behaviour."""

    def test_immutable(self):
        """Tables cannot be modified after construction."""
        table = build("src", {"@a/*": "a/*"})
        with pytest.raises(AttributeError):
            table.base_dir = "other"
        with pytest.raises(AttributeError):
            table.extra = 1

    def test_duplicate_key_replaces_in_place(self):
        """A later entry for the same alias wins but keeps the first position."""
        first = build("", {"@a/*": "one/*", "@b/*": "b/*"}).entries
        second = build("", {"@a/*": "two/*"}).entries
        table = AliasTable("", [first[0], first[1], second[0]])
        assert list(table) == ["@a/*", "@b/*"]
        assert table.lookup("@a/*").targets.candidates == ("two/*",)
