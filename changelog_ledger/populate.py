"""Regenerate the ``[Unreleased]`` section from a commit range."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Iterable, List

from .categories import CATEGORY_ORDER, DEFAULT_CLASSIFIER, Category, CategoryClassifier
from .commits import CommitRecord, commit_records, split_commit_log
from .document import UNRELEASED_HEADING, Block, ChangelogDocument
from .logging_utils import get_logger

log = get_logger(__name__)

NO_CHANGES = "No changes yet."
BREAKING_HEADING = "### ⚠️ BREAKING CHANGES"
BREAKING_MARKER = "⚠️ BREAKING"


@dataclass(frozen=True)
class Fragment:
    """A commit record tagged with its category; breaking ones render twice."""

    record: CommitRecord
    category: Category

    @property
    def breaking(self) -> bool:
        return self.record.breaking


def classify_records(
    records: Iterable[CommitRecord],
    classifier: CategoryClassifier = DEFAULT_CLASSIFIER,
) -> List[Fragment]:
    fragments = []
    for record in records:
        category = classifier.classify(record.type)
        if category is Category.IGNORED:
            continue
        fragments.append(Fragment(record, category))
    return fragments


def format_change_line(record: CommitRecord, repo_url: str, *, marker: bool) -> str:
    line = f"- {record.description}"
    if record.scope:
        line += f" ({record.scope})"
    if marker and record.breaking:
        line += f" {BREAKING_MARKER}"
    if repo_url:
        line += f" ([{record.sha}]({repo_url}/commit/{record.sha}))"
    else:
        line += f" ({record.sha})"
    return line


def render_fragments(fragments: List[Fragment], repo_url: str = "") -> str:
    grouped: "OrderedDict[Category, List[Fragment]]" = OrderedDict(
        (category, []) for category in CATEGORY_ORDER
    )
    for fragment in fragments:
        grouped[fragment.category].append(fragment)

    blocks: List[str] = []
    breaking = [fragment for fragment in fragments if fragment.breaking]
    if breaking:
        lines = [BREAKING_HEADING]
        lines.extend(format_change_line(f.record, repo_url, marker=False) for f in breaking)
        blocks.append("\n".join(lines))

    for category, members in grouped.items():
        if not members:
            continue
        lines = [category.heading]
        lines.extend(format_change_line(f.record, repo_url, marker=True) for f in members)
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks) if blocks else NO_CHANGES


def collect_fragments(
    commit_log: str,
    classifier: CategoryClassifier = DEFAULT_CLASSIFIER,
) -> List[Fragment]:
    records: List[CommitRecord] = []
    for entry in split_commit_log(commit_log):
        records.extend(commit_records(entry))
    return classify_records(records, classifier)


def render_unreleased_body(
    commit_log: str,
    repo_url: str = "",
    classifier: CategoryClassifier = DEFAULT_CLASSIFIER,
) -> str:
    return render_fragments(collect_fragments(commit_log, classifier), repo_url)


def replace_unreleased_body(text: str, body: str) -> str:
    document = ChangelogDocument.parse(text)
    section_body = f"\n{body}\n\n"
    index = document.find_unreleased()
    if index is None:
        log.info("No [Unreleased] heading found; inserting one.")
        document.insert_before_sections(Block(f"{UNRELEASED_HEADING}\n", section_body))
    else:
        document.blocks[index].set_body(section_body)
    return document.render()


def populate_unreleased(
    text: str,
    commit_log: str,
    repo_url: str = "",
    classifier: CategoryClassifier = DEFAULT_CLASSIFIER,
) -> str:
    """Return ``text`` with its ``[Unreleased]`` body rebuilt from ``commit_log``."""
    fragments = collect_fragments(commit_log, classifier)
    log.info("Rendered [Unreleased] section.", extra={"changes": len(fragments)})
    return replace_unreleased_body(text, render_fragments(fragments, repo_url))
