"""Map conventional-commit types to Keep a Changelog categories."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from .logging_utils import get_logger

log = get_logger(__name__)


class Category(str, Enum):
    ADDED = "Added"
    FIXED = "Fixed"
    CHANGED = "Changed"
    REMOVED = "Removed"
    SECURITY = "Security"
    IGNORED = "Ignored"

    @property
    def heading(self) -> str:
        return f"### {self.value}"

    @classmethod
    def parse(cls, name: str) -> "Category":
        wanted = name.strip().lower()
        for category in cls:
            if category.value.lower() == wanted:
                return category
        choices = ", ".join(c.value for c in cls)
        raise ValueError(f"Unknown changelog category {name!r}; expected one of: {choices}")


# Rendering order of the category blocks.
CATEGORY_ORDER = (
    Category.ADDED,
    Category.FIXED,
    Category.CHANGED,
    Category.REMOVED,
    Category.SECURITY,
)


def _table(groups: Iterable[tuple[Category, tuple[str, ...]]]) -> Mapping[str, Category]:
    return MappingProxyType({name: category for category, names in groups for name in names})


DEFAULT_CATEGORY_TABLE = _table(
    [
        (Category.ADDED, ("feat", "feature", "add")),
        (Category.FIXED, ("fix", "bugfix")),
        (Category.SECURITY, ("security",)),
        (
            Category.CHANGED,
            (
                "perf", "refactor", "style", "docs", "test", "chore", "build",
                "deps", "dependency", "dependencies", "revert", "misc",
            ),
        ),
        (Category.REMOVED, ("remove", "removed", "delete", "deleted")),
        # Release-process commits never reach the changelog.
        (Category.IGNORED, ("ci", "release", "hotfix")),
    ]
)


class CategoryClassifier:
    def __init__(
        self,
        table: Mapping[str, Category] = DEFAULT_CATEGORY_TABLE,
        default: Category = Category.CHANGED,
    ):
        self.table = MappingProxyType({key.lower(): value for key, value in table.items()})
        self.default = default

    def with_overrides(self, overrides: Mapping[str, Category]) -> "CategoryClassifier":
        merged = dict(self.table)
        merged.update({key.lower(): value for key, value in overrides.items()})
        return CategoryClassifier(merged, self.default)

    def classify(self, commit_type: str) -> Category:
        category = self.table.get(commit_type.lower())
        if category is None:
            log.debug("Unknown commit type; using default category.",
                      extra={"type": commit_type, "category": self.default.value})
            return self.default
        return category


DEFAULT_CLASSIFIER = CategoryClassifier()


def classify(commit_type: str) -> Category:
    return DEFAULT_CLASSIFIER.classify(commit_type)


def parse_type_overrides(items: Iterable[str]) -> dict[str, Category]:
    """Parse ``type=Category`` pairs as given on the command line or in CHANGELOG_TYPE_MAP."""
    overrides: dict[str, Category] = {}
    for item in items:
        item = item.strip()
        if not item:
            continue
        commit_type, sep, name = item.partition("=")
        if not sep or not commit_type.strip():
            raise ValueError(f"Invalid type mapping {item!r}; expected TYPE=CATEGORY")
        overrides[commit_type.strip().lower()] = Category.parse(name)
    return overrides
