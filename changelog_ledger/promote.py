"""Promote ``[Unreleased]`` into a dated version entry and refresh the link footer."""

from __future__ import annotations

from .document import Block, ChangelogDocument
from .errors import EmptyUnreleasedError, MissingUnreleasedSectionError
from .links import link_targets, update_reference_links
from .logging_utils import get_logger
from .semver import tag_for, validate_and_normalize_semver

log = get_logger(__name__)


def infer_heading_label(version: str, normalized: str, document: ChangelogDocument) -> str:
    """Follow the document's existing heading style, else the caller's ``v`` choice."""
    first = document.first_version_label()
    if first:
        prefixed = first.lower().startswith("v")
    else:
        prefixed = version.strip().lower().startswith("v")
    return f"v{normalized}" if prefixed else normalized


def promote_version(
    text: str,
    version: str,
    date: str,
    repo_url: str = "",
    *,
    source: str = "CHANGELOG.md",
) -> str:
    normalized = validate_and_normalize_semver(version)
    tag = tag_for(normalized)
    logger = log.bind(tag=tag)

    document = ChangelogDocument.parse(text)
    unreleased_index = document.find_unreleased()
    if unreleased_index is None:
        raise MissingUnreleasedSectionError(source)
    unreleased = document.blocks[unreleased_index]
    content = unreleased.body.strip()

    existing = document.find_version(normalized)
    if existing is not None:
        index, label = existing
        if not content:
            logger.info("Version already in changelog and [Unreleased] is empty; nothing to do.")
            return text
        logger.warning(
            "Version already in changelog but [Unreleased] has content; merging into existing entry."
        )
        entry = document.blocks[index]
        previous = entry.body.lstrip("\r\n")
        entry.set_body(f"\n{content}\n\n{previous}")
    else:
        if not content:
            raise EmptyUnreleasedError()
        label = infer_heading_label(version, normalized, document)
        logger.info("Moving [Unreleased] content to new entry.", extra={"label": label})
        document.blocks.insert(
            unreleased_index + 1,
            Block(f"## [{label}] - {date}\n", f"\n{content}\n\n"),
        )
    unreleased.set_body("\n")

    update = update_reference_links(document.render(), [tag, label], link_targets(repo_url, tag))
    logger.info("Changelog promoted.", extra={"repo_url": repo_url or None})
    return update.text
