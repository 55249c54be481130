import pytest

from changelog_ledger.categories import (
    DEFAULT_CATEGORY_TABLE,
    Category,
    CategoryClassifier,
    classify,
    parse_type_overrides,
)


@pytest.mark.parametrize(
    "commit_type, expected",
    [
        ("feat", Category.ADDED),
        ("feature", Category.ADDED),
        ("add", Category.ADDED),
        ("fix", Category.FIXED),
        ("bugfix", Category.FIXED),
        ("security", Category.SECURITY),
        ("refactor", Category.CHANGED),
        ("deps", Category.CHANGED),
        ("dependencies", Category.CHANGED),
        ("misc", Category.CHANGED),
        ("remove", Category.REMOVED),
        ("deleted", Category.REMOVED),
        ("unknown", Category.CHANGED),
    ],
)
def test_default_table(commit_type, expected):
    assert classify(commit_type) is expected


@pytest.mark.parametrize("commit_type", ["ci", "CI", "release", "Release", "hotfix", "HOTFIX"])
def test_release_process_types_are_ignored(commit_type):
    assert classify(commit_type) is Category.IGNORED


def test_lookup_is_case_insensitive():
    assert classify("FEAT") is Category.ADDED
    assert classify("Fix") is Category.FIXED


def test_default_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CATEGORY_TABLE["wip"] = Category.IGNORED  # type: ignore[index]


def test_custom_table_and_overrides():
    classifier = CategoryClassifier({"Feat": Category.ADDED}, default=Category.IGNORED)
    assert classifier.classify("feat") is Category.ADDED
    assert classifier.classify("fix") is Category.IGNORED

    extended = CategoryClassifier().with_overrides({"WIP": Category.IGNORED})
    assert extended.classify("wip") is Category.IGNORED
    assert extended.classify("feat") is Category.ADDED


def test_parse_type_overrides():
    assert parse_type_overrides(["wip=ignored", " perf = Fixed ", ""]) == {
        "wip": Category.IGNORED,
        "perf": Category.FIXED,
    }


@pytest.mark.parametrize("item", ["wip", "=Added", "wip=Bogus"])
def test_parse_type_overrides_rejects_bad_items(item):
    with pytest.raises(ValueError):
        parse_type_overrides([item])
