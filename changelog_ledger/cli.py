"""Command-line entry point: populate, promote, extract, init and check."""

from __future__ import annotations

import argparse
import re
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from .categories import parse_type_overrides
from .config import Settings
from .document import ChangelogDocument
from .errors import ChangelogError
from .extract import extract_version
from .git import collect_commit_log, latest_tag, resolve_repository_url
from .logging_utils import get_logger, setup_logging
from .populate import NO_CHANGES, populate_unreleased
from .promote import promote_version
from .storage import ensure_changelog_skeleton, read_document, today, write_document

Clock = Callable[[], str]

log = get_logger("changelog_ledger")


@dataclass(frozen=True)
class CheckResult:
    name: str
    passed: bool
    message: str = ""


def check_document(text: str, *, require_unreleased: bool = False) -> List[CheckResult]:
    results = [
        CheckResult("title", text.startswith("# "), "Missing title (# Changelog)"),
    ]
    document = ChangelogDocument.parse(text)
    index = document.find_unreleased()
    results.append(CheckResult("[Unreleased] section", index is not None, "Missing [Unreleased] section"))
    results.append(
        CheckResult(
            "Keep a Changelog format",
            re.search(r"keepachangelog\.com", text, re.IGNORECASE) is not None,
            "Missing keepachangelog.com reference",
        )
    )
    if require_unreleased:
        body = document.blocks[index].body.strip() if index is not None else ""
        results.append(
            CheckResult(
                "[Unreleased] has content",
                bool(body) and body != NO_CHANGES,
                "[Unreleased] section is empty",
            )
        )
    return results


def _repository_url(settings: Settings) -> str:
    return resolve_repository_url(
        settings.repository_url, settings.github_repository, settings.git_remote
    )


def cmd_populate(args: argparse.Namespace, settings: Settings, clock: Clock) -> int:
    path = settings.changelog_file
    text = read_document(path)
    commit_log = collect_commit_log(latest_tag())
    updated = populate_unreleased(text, commit_log, _repository_url(settings), settings.classifier())
    write_document(path, updated)
    log.info("Updated [Unreleased] section.", extra={"file": path})
    return 0


def cmd_promote(args: argparse.Namespace, settings: Settings, clock: Clock) -> int:
    path = settings.changelog_file
    text = read_document(path)
    updated = promote_version(
        text,
        args.version,
        args.date or clock(),
        _repository_url(settings),
        source=path,
    )
    if updated == text:
        log.info("Changelog unchanged.", extra={"file": path})
        return 0
    write_document(path, updated)
    log.info("Changelog written.", extra={"file": path, "version": args.version})
    return 0


def cmd_extract(args: argparse.Namespace, settings: Settings, clock: Clock) -> int:
    notes = extract_version(read_document(settings.changelog_file), args.version,
                            source=settings.changelog_file)
    if args.output:
        Path(args.output).write_text(notes + "\n", encoding="utf-8")
        log.info("Release notes written.", extra={"output": args.output})
    else:
        sys.stdout.write(notes + "\n")
    return 0


def cmd_init(args: argparse.Namespace, settings: Settings, clock: Clock) -> int:
    path = settings.changelog_file
    if ensure_changelog_skeleton(path, force=args.force):
        log.info("Created changelog.", extra={"file": path})
        return 0
    log.warning("Changelog already exists; use --force to overwrite.", extra={"file": path})
    return 1


def cmd_check(args: argparse.Namespace, settings: Settings, clock: Clock) -> int:
    results = check_document(
        read_document(settings.changelog_file), require_unreleased=args.require_unreleased
    )
    for result in results:
        if result.passed:
            print(f"PASS {result.name}")
        else:
            print(f"FAIL {result.name}: {result.message}")
    return 0 if all(result.passed for result in results) else 1


COMMANDS: Dict[str, Callable[[argparse.Namespace, Settings, Clock], int]] = {
    "populate": cmd_populate,
    "promote": cmd_promote,
    "extract": cmd_extract,
    "init": cmd_init,
    "check": cmd_check,
}


def _iso_date(value: str) -> str:
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}; expected YYYY-MM-DD")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="changelog-ledger",
        description="Maintain a Keep a Changelog file from conventional commits.",
    )
    parser.add_argument(
        "--file", help="Changelog path (default: $CHANGELOG_FILE or CHANGELOG.md)."
    )
    parser.add_argument(
        "--repo-url", help="Repository URL used for commit and tag links."
    )
    parser.add_argument("--remote", help="Git remote to derive the repository URL from.")
    parser.add_argument(
        "-t",
        "--type",
        dest="types",
        action="append",
        default=[],
        metavar="TYPE=CATEGORY",
        help="Map a commit type to a category (Added, Fixed, Changed, Removed, Security, Ignored).",
    )
    parser.add_argument("--log-level", help="Logging level (default: $LOG_LEVEL or INFO).")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("populate", help="Rebuild [Unreleased] from commits since the last tag.")

    promote = commands.add_parser("promote", help="Move [Unreleased] into a version entry.")
    promote.add_argument("version", help="Version to release, e.g. 1.2.3 or v1.2.3")
    promote.add_argument("--date", type=_iso_date, help="Release date (default: today).")

    extract = commands.add_parser("extract", help="Print release notes for a version.")
    extract.add_argument("version", help="Version to extract, e.g. 1.2.3 or v1.2.3")
    extract.add_argument("--output", help="Write notes to this file instead of stdout.")

    init = commands.add_parser("init", help="Create a Keep a Changelog skeleton.")
    init.add_argument("--force", action="store_true", help="Overwrite an existing file.")

    check = commands.add_parser("check", help="Validate the changelog format.")
    check.add_argument(
        "--require-unreleased",
        action="store_true",
        help="Fail when [Unreleased] has no entries.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None, *, clock: Clock = today) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = Settings.from_env().override(
            changelog_file=args.file,
            repository_url=args.repo_url,
            git_remote=args.remote,
            log_level=args.log_level,
            type_overrides=parse_type_overrides(args.types),
        )
    except ValueError as exc:
        parser.error(str(exc))

    setup_logging(level=settings.log_level)
    try:
        return COMMANDS[args.command](args, settings, clock)
    except ChangelogError as exc:
        log.error(str(exc), extra={"command": args.command})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
