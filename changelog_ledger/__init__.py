"""Keep a Changelog maintenance driven by conventional commits."""

from .categories import Category, CategoryClassifier, classify
from .commits import CommitRecord, parse_commit_message
from .document import ChangelogDocument
from .errors import (
    ChangelogError,
    EmptyUnreleasedError,
    EmptyVersionBlockError,
    MalformedVersionError,
    MissingUnreleasedSectionError,
    NoMatchingVersionBlockError,
)
from .extract import extract_version
from .populate import populate_unreleased, render_unreleased_body
from .promote import promote_version
from .semver import escape_regexp, is_valid_semver, validate_and_normalize_semver

__version__ = "0.1.0"

__all__ = [
    "Category",
    "CategoryClassifier",
    "ChangelogDocument",
    "ChangelogError",
    "CommitRecord",
    "EmptyUnreleasedError",
    "EmptyVersionBlockError",
    "MalformedVersionError",
    "MissingUnreleasedSectionError",
    "NoMatchingVersionBlockError",
    "classify",
    "escape_regexp",
    "extract_version",
    "is_valid_semver",
    "parse_commit_message",
    "populate_unreleased",
    "promote_version",
    "render_unreleased_body",
    "validate_and_normalize_semver",
]
