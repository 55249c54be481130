from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from .categories import Category, CategoryClassifier, parse_type_overrides
from .logging_utils import parse_level

DEFAULT_CHANGELOG_FILE = "CHANGELOG.md"


@dataclass(frozen=True)
class Settings:
    changelog_file: str = DEFAULT_CHANGELOG_FILE
    repository_url: str = ""
    github_repository: str = ""
    git_remote: str = "origin"
    log_level: int = logging.INFO
    type_overrides: Mapping[str, Category] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            changelog_file=env.get("CHANGELOG_FILE") or DEFAULT_CHANGELOG_FILE,
            repository_url=(env.get("REPOSITORY_URL") or "").strip(),
            github_repository=(env.get("GITHUB_REPOSITORY") or "").strip(),
            git_remote=env.get("GIT_REMOTE") or "origin",
            log_level=parse_level(env.get("LOG_LEVEL")),
            type_overrides=parse_type_overrides((env.get("CHANGELOG_TYPE_MAP") or "").split(",")),
        )

    def override(self, **options: Any) -> "Settings":
        """Apply command-line values; ``None`` and empty values leave a setting alone."""
        changes = {key: value for key, value in options.items() if value not in (None, "", [], {})}
        if "type_overrides" in changes:
            merged = dict(self.type_overrides)
            merged.update(changes["type_overrides"])
            changes["type_overrides"] = merged
        if "log_level" in changes:
            changes["log_level"] = parse_level(changes["log_level"])
        return replace(self, **changes)

    def classifier(self) -> CategoryClassifier:
        return CategoryClassifier().with_overrides(self.type_overrides)
