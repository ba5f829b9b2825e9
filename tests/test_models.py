"""
Tests for the Group model.
"""

import pytest

from pacdef.core.models.group import Group, Section


class TestGroup:
    def test_packages_for_section(self, base_group: Group):
        assert base_group.packages_for("pkg") == ("vim", "git")

    def test_packages_for_unknown_section(self, base_group: Group):
        assert base_group.packages_for("lang") == ()

    def test_repeated_section_merges_in_order(self):
        group = Group(
            name="g",
            sections=(
                Section(name="pkg", packages=("b", "a")),
                Section(name="lang", packages=("x",)),
                Section(name="pkg", packages=("a", "c")),
            ),
        )
        assert group.packages_for("pkg") == ("b", "a", "c")
        assert group.section_names() == ["pkg", "lang"]

    def test_merge(self, base_group: Group):
        other = Group(name="base", sections=(Section(name="pkg", packages=("curl",)),))
        merged = base_group.merge(other)
        assert merged.packages_for("pkg") == ("vim", "git", "curl")
        # originals untouched
        assert base_group.packages_for("pkg") == ("vim", "git")

    def test_merge_different_names(self, base_group: Group):
        with pytest.raises(ValueError):
            base_group.merge(Group(name="other"))

    def test_frozen(self, base_group: Group):
        with pytest.raises(Exception):
            base_group.name = "renamed"

    def test_hashable_and_equal(self, base_group: Group):
        same = Group(name="base", sections=(Section(name="pkg", packages=("vim", "git")),))
        assert {base_group, same} == {base_group}

    def test_sorting_by_name(self):
        groups = [Group(name="b"), Group(name="a"), Group(name="C")]
        assert [g.name for g in sorted(groups)] == ["C", "a", "b"]

    def test_names_are_case_sensitive(self):
        assert Group(name="Base") != Group(name="base")
