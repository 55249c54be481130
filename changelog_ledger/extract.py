from __future__ import annotations

from .document import ChangelogDocument
from .errors import EmptyVersionBlockError, NoMatchingVersionBlockError
from .semver import tag_for, validate_and_normalize_semver


def extract_version(text: str, version: str, *, source: str = "CHANGELOG.md") -> str:
    """Release notes for ``version``: a ``# Release vX.Y.Z`` title plus its block."""
    normalized = validate_and_normalize_semver(version)
    tag = tag_for(normalized)

    document = ChangelogDocument.parse(text)
    found = document.find_version(normalized)
    if found is None:
        raise NoMatchingVersionBlockError([tag, normalized], source)

    block = document.blocks[found[0]]
    if not block.body.strip():
        raise EmptyVersionBlockError(tag)
    return f"# Release {tag}\n\n{block.render().strip()}"
