"""Semantic-version validation and regex helpers shared by the section locators."""

from __future__ import annotations

import re

from .errors import MalformedVersionError

_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

SEMVER_RE = re.compile(
    rf"v?(\d+)\.(\d+)\.(\d+)(?:-({_IDENTIFIERS}))?(?:\+({_IDENTIFIERS}))?",
    re.ASCII,
)

_REGEXP_SPECIALS = re.compile(r"[-/\\^$*+?.()|[\]{}]")


def is_valid_semver(version: str) -> bool:
    return SEMVER_RE.fullmatch(version) is not None


def validate_and_normalize_semver(version: str) -> str:
    """Return ``version`` without its leading ``v``; raise if it is not SemVer 2.0."""
    if not is_valid_semver(version):
        raise MalformedVersionError(version)
    return version[1:] if version.startswith("v") else version


def tag_for(normalized: str) -> str:
    return f"v{normalized}"


def escape_regexp(value: str) -> str:
    return _REGEXP_SPECIALS.sub(r"\\\g<0>", value)
