"""Conventional-commit extraction from raw ``git log`` output."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from .logging_utils import get_logger

log = get_logger(__name__)

COMMIT_DELIMITER = "|||END|||"
SKIP_MARKER = "[skip-changelog]"
MISC_TYPE = "misc"

# type(scope)!: description -- one match per line of the body.
CONVENTIONAL_COMMIT_RE = re.compile(r"^(\w+)(?:\(([^)]+)\))?(!)?\s*:\s*(.+)", re.MULTILINE)
_SKIP_RE = re.compile(re.escape(SKIP_MARKER), re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class CommitRecord:
    type: str
    description: str
    sha: str
    scope: Optional[str] = None
    breaking: bool = False


@dataclass(frozen=True)
class CommitLogEntry:
    sha: str
    body: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def skipped(self) -> bool:
        return _SKIP_RE.search(self.body) is not None


def parse_commit_message(body: str, sha: str) -> List[CommitRecord]:
    """Return every conventional-commit fragment found in ``body``.

    Squashed commits often carry several ``type: description`` lines; each one
    becomes its own record tagged with the same ``sha``.
    """
    records: List[CommitRecord] = []
    for match in CONVENTIONAL_COMMIT_RE.finditer(body):
        commit_type, scope, bang, description = match.groups()
        description = _WHITESPACE_RE.sub(" ", description).strip()
        if not description:
            continue
        records.append(
            CommitRecord(
                type=commit_type.strip(),
                scope=scope.strip() if scope else None,
                description=description,
                sha=sha,
                breaking=bool(bang),
            )
        )
    return records


def split_commit_log(raw: str) -> List[CommitLogEntry]:
    """Split ``%H|%B|||END|||`` formatted log output into entries."""
    entries: List[CommitLogEntry] = []
    if not raw:
        return entries
    for record in raw.split(COMMIT_DELIMITER):
        if not record.strip():
            continue
        sha, _, body = record.partition("|")
        sha = sha.strip()
        body = body.strip()
        if not sha or not body:
            continue
        entries.append(CommitLogEntry(sha=sha, body=body))
    return entries


def first_line(body: str) -> str:
    for line in body.splitlines():
        if line.strip():
            return line.strip()
    return ""


def commit_records(entry: CommitLogEntry) -> List[CommitRecord]:
    """Records for one log entry, with the ``misc`` fallback for free-form messages."""
    if entry.skipped:
        log.debug("Skipping commit marked [skip-changelog].", extra={"sha": entry.short_sha})
        return []
    records = parse_commit_message(entry.body, entry.short_sha)
    if records:
        return records
    subject = first_line(entry.body)
    if not subject:
        return []
    return [CommitRecord(type=MISC_TYPE, description=subject, sha=entry.short_sha)]
