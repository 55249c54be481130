from __future__ import annotations


class ChangelogError(Exception):
    """Base class for every fatal changelog condition."""


class MalformedVersionError(ChangelogError, ValueError):
    def __init__(self, version: str):
        self.version = version
        super().__init__(
            f'Invalid semantic version: "{version}". '
            "Expected format: [v]MAJOR.MINOR.PATCH[-prerelease][+buildmetadata]"
        )


class MissingUnreleasedSectionError(ChangelogError):
    def __init__(self, source: str = "CHANGELOG.md"):
        self.source = source
        super().__init__(
            f"No [Unreleased] section found in {source}. Run the populate command first."
        )


class EmptyUnreleasedError(ChangelogError):
    def __init__(self) -> None:
        super().__init__(
            "[Unreleased] section is empty. Run populate first or add content manually."
        )


class NoMatchingVersionBlockError(ChangelogError, LookupError):
    def __init__(self, labels: list[str], source: str = "CHANGELOG.md"):
        self.labels = labels
        self.source = source
        human = " or ".join(f"[{label}]" for label in labels)
        super().__init__(f"No {human} section found in {source}")


class EmptyVersionBlockError(ChangelogError, LookupError):
    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"No changelog entry found for {tag}")


class ChangelogFileNotFoundError(ChangelogError, FileNotFoundError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Changelog file not found: {path}")
