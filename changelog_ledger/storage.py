from __future__ import annotations

from datetime import date
from pathlib import Path

from .errors import ChangelogFileNotFoundError

CHANGELOG_TEMPLATE = (
    "# Changelog\n\n"
    "All notable changes to this project will be documented in this file.\n\n"
    "The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.1.0/),\n"
    "and this project adheres to [Semantic Versioning](https://semver.org/spec/v2.0.0.html).\n\n"
    "## [Unreleased]\n\n"
)


def read_document(path: Path | str) -> str:
    path = Path(path)
    if not path.exists():
        raise ChangelogFileNotFoundError(str(path))
    return path.read_text(encoding="utf-8")


def write_document(path: Path | str, text: str) -> None:
    Path(path).write_text(text, encoding="utf-8")


def ensure_changelog_skeleton(path: Path | str, *, force: bool = False) -> bool:
    """Write the empty template; returns ``False`` when a file is kept as is."""
    path = Path(path)
    if path.exists() and not force:
        return False
    write_document(path, CHANGELOG_TEMPLATE)
    return True


def today() -> str:
    return date.today().isoformat()
