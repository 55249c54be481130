"""Reference-link definitions at the foot of the changelog."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
from urllib.parse import urlsplit

from .logging_utils import get_logger
from .semver import escape_regexp

log = get_logger(__name__)

UNRELEASED_LINK_RE = re.compile(r"^\[Unreleased\]:", re.IGNORECASE)
_LINK_DEFINITION_RE = re.compile(r"^\[[^\]]+\]:")


@dataclass(frozen=True)
class LinkTargets:
    version: str
    unreleased: str

    @property
    def unreleased_line(self) -> str:
        return f"[Unreleased]: {self.unreleased}"

    def version_line(self, label: str) -> str:
        return f"[{label}]: {self.version}"


@dataclass
class LinkUpdate:
    text: str
    added_unreleased_link: bool = False
    added_version_links: List[str] = field(default_factory=list)


def _host(repo_url: str) -> str:
    try:
        return (urlsplit(repo_url).hostname or repo_url).lower()
    except ValueError:
        return repo_url.lower()


def link_targets(repo_url: str, tag: str) -> LinkTargets:
    """Release and compare URLs for ``tag`` in the style of the repository host."""
    host = _host(repo_url)
    if "github" in host:
        return LinkTargets(
            version=f"{repo_url}/releases/tag/{tag}",
            unreleased=f"{repo_url}/compare/{tag}...HEAD",
        )
    if "gitlab" in host:
        return LinkTargets(
            version=f"{repo_url}/-/tags/{tag}",
            unreleased=f"{repo_url}/-/compare/{tag}...HEAD",
        )
    return LinkTargets(version=repo_url, unreleased=repo_url)


def _unique(labels: Sequence[str]) -> List[str]:
    seen = set()
    result = []
    for label in labels:
        if label.lower() not in seen:
            seen.add(label.lower())
            result.append(label)
    return result


def update_reference_links(text: str, labels: Sequence[str], targets: LinkTargets) -> LinkUpdate:
    """Rewrite or add one definition per label plus the ``[Unreleased]`` one.

    Existing definitions are updated in place wherever they sit; missing version
    labels go directly below ``[Unreleased]:`` so the footer stays newest-first.
    """
    labels = _unique(labels)
    patterns: List[Tuple[str, re.Pattern[str]]] = [
        (label, re.compile(rf"^\[{escape_regexp(label)}\]:", re.IGNORECASE)) for label in labels
    ]
    lines = text.splitlines()
    updated: List[str] = []
    unreleased_at = -1
    found = set()

    for line in lines:
        if UNRELEASED_LINK_RE.match(line):
            if unreleased_at >= 0:
                continue
            unreleased_at = len(updated)
            updated.append(targets.unreleased_line)
            continue
        matching = next((label for label, regex in patterns if regex.match(line)), None)
        if matching is not None:
            if matching in found:
                continue
            found.add(matching)
            updated.append(targets.version_line(matching))
            continue
        updated.append(line)

    missing = [label for label in labels if label not in found]
    missing_lines = [targets.version_line(label) for label in missing]
    added_unreleased = unreleased_at < 0

    if added_unreleased:
        while updated and not updated[-1].strip():
            updated.pop()
        if updated and not _LINK_DEFINITION_RE.match(updated[-1]):
            updated.append("")
        updated.append(targets.unreleased_line)
        updated.extend(missing_lines)
    else:
        updated[unreleased_at + 1:unreleased_at + 1] = missing_lines

    if missing or added_unreleased:
        log.info(
            "Appended reference links.",
            extra={"labels": ", ".join((["Unreleased"] if added_unreleased else []) + missing)},
        )

    result = "\n".join(updated)
    if text.endswith("\n") or added_unreleased:
        result += "\n"
    return LinkUpdate(result, added_unreleased, missing)
