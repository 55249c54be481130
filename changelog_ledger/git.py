"""Thin ``git`` wrappers: commit range source and repository URL resolver."""

from __future__ import annotations

import re
import subprocess
from typing import Optional, Sequence

from .commits import COMMIT_DELIMITER
from .logging_utils import get_logger

log = get_logger(__name__)

LOG_FORMAT = f"--pretty=format:%H|%B{COMMIT_DELIMITER}"

REMOTE_PATTERNS = [
    r"^git@(?P<host>[^:/]+):(?P<path>.+)$",
    r"^ssh://(?:[^@/]+@)?(?P<host>[^:/]+)(?::\d+)?/(?P<path>.+)$",
    r"^(?:https?|git)://(?:[^@/]+@)?(?P<host>[^:/]+)(?::\d+)?/(?P<path>.+)$",
]


def run_git(args: Sequence[str]) -> str:
    return subprocess.check_output(
        ["git", *args], text=True, stderr=subprocess.DEVNULL
    ).strip()


def latest_tag() -> Optional[str]:
    try:
        tag = run_git(["describe", "--tags", "--abbrev=0"])
    except (subprocess.CalledProcessError, OSError):
        log.info("No tags found, using all commits.")
        return None
    if not tag:
        return None
    log.info("Latest tag found.", extra={"tag": tag})
    return tag


def collect_commit_log(since: Optional[str] = None) -> str:
    """``%H|%B`` records since ``since`` (whole history when ``None``)."""
    args = ["log", LOG_FORMAT]
    if since:
        args.append(f"{since}..HEAD")
    try:
        return run_git(args)
    except (subprocess.CalledProcessError, OSError):
        log.info("No new commits found.")
        return ""


def normalize_remote_url(remote_url: str) -> str:
    """HTTPS form of an SSH or HTTP(S) remote, without ``.git`` or credentials."""
    url = remote_url.strip()
    for pattern in REMOTE_PATTERNS:
        match = re.match(pattern, url)
        if match:
            url = f"https://{match.group('host')}/{match.group('path')}"
            break
    url = url.rstrip("/")
    if url.endswith(".git"):
        url = url[:-4]
    return url


def remote_url(remote: str = "origin") -> str:
    return run_git(["config", "--get", f"remote.{remote}.url"])


def resolve_repository_url(
    override: str = "",
    github_repository: str = "",
    remote: str = "origin",
) -> str:
    """Best-effort repository URL; ``""`` when nothing can be determined."""
    if override:
        return override.rstrip("/")
    if github_repository:
        return f"https://github.com/{github_repository.strip('/')}"
    try:
        return normalize_remote_url(remote_url(remote))
    except (subprocess.CalledProcessError, OSError):
        log.warning(
            "Could not determine repository URL; links will not be generated. "
            "Set REPOSITORY_URL or GITHUB_REPOSITORY (owner/repo).",
            extra={"remote": remote},
        )
        return ""
