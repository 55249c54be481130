from changelog_ledger.categories import Category, CategoryClassifier
from changelog_ledger.populate import (
    NO_CHANGES,
    collect_fragments,
    populate_unreleased,
    render_unreleased_body,
)

REPO = "https://github.com/owner/repo"


def test_single_commit_without_repo_url():
    assert render_unreleased_body("abc1234|feat: add X|||END|||", "") == "### Added\n- add X (abc1234)"


def test_skip_marker_gives_no_changes():
    assert render_unreleased_body("abc1234|[skip-changelog] feat: x|||END|||", "") == NO_CHANGES
    assert render_unreleased_body("abc1234|feat: add [skip-changelog]|||END|||", REPO) == NO_CHANGES


def test_empty_log_gives_no_changes():
    assert render_unreleased_body("", REPO) == NO_CHANGES


def test_commit_links_use_short_sha():
    body = render_unreleased_body("abc1234567890|feat: add new feature|||END|||", REPO)
    assert body == (
        "### Added\n"
        "- add new feature ([abc1234](https://github.com/owner/repo/commit/abc1234))"
    )


def test_grouping_follows_fixed_category_order():
    log = (
        "1111111|fix: fix B|||END|||"
        "2222222|feat: add A|||END|||"
        "3333333|security: patch C|||END|||"
        "4444444|remove: drop D|||END|||"
        "5555555|feat: add E|||END|||"
        "6666666|Plain message|||END|||"
    )
    assert render_unreleased_body(log, "") == (
        "### Added\n- add A (2222222)\n- add E (5555555)\n\n"
        "### Fixed\n- fix B (1111111)\n\n"
        "### Changed\n- Plain message (6666666)\n\n"
        "### Removed\n- drop D (4444444)\n\n"
        "### Security\n- patch C (3333333)"
    )


def test_ignored_types_never_render():
    log = "abc1234|ci: update workflow|||END|||def5678|RELEASE: v1|||END|||"
    assert render_unreleased_body(log, REPO) == NO_CHANGES


def test_breaking_change_is_listed_twice():
    body = render_unreleased_body("abc1234|feat(core)!: new API|||END|||", "")
    assert body == (
        "### ⚠️ BREAKING CHANGES\n"
        "- new API (core) (abc1234)\n\n"
        "### Added\n"
        "- new API (core) ⚠️ BREAKING (abc1234)"
    )


def test_breaking_without_repo_url_has_no_link_syntax():
    body = render_unreleased_body("abc1234|feat!: add feature|||END|||", "")
    assert "⚠️ BREAKING" in body
    assert "(abc1234)" in body
    assert "[abc1234]" not in body


def test_squashed_commit_renders_each_fragment():
    log = "abc1234|feat: add A\nfix: fix B\n\nci: skip me|||END|||"
    body = render_unreleased_body(log, "")
    assert "- add A (abc1234)" in body
    assert "- fix B (abc1234)" in body
    assert "skip me" not in body


def test_custom_classifier():
    classifier = CategoryClassifier().with_overrides({"docs": Category.IGNORED})
    assert render_unreleased_body("abc1234|docs: tweak|||END|||", "", classifier) == NO_CHANGES


def test_replaces_existing_unreleased_body():
    text = (
        "# Changelog\n\n## [Unreleased]\n\nNo changes yet.\n\n"
        "## [v1.0.0] - 2024-01-01\n\n- Initial release\n"
    )
    result = populate_unreleased(text, "abc1234|feat: add feature|||END|||")
    assert result == (
        "# Changelog\n\n## [Unreleased]\n\n### Added\n- add feature (abc1234)\n\n"
        "## [v1.0.0] - 2024-01-01\n\n- Initial release\n"
    )


def test_populate_is_repeatable():
    text = "# Changelog\n\n## [Unreleased]\n\n"
    log = "abc1234|fix: repair|||END|||"
    once = populate_unreleased(text, log)
    assert populate_unreleased(once, log) == once


def test_keeps_reference_links_when_unreleased_is_last():
    text = (
        "# Changelog\n\n## [Unreleased]\n\n- stale\n\n"
        "[Unreleased]: https://github.com/owner/repo/compare/v1.0.0...HEAD\n"
    )
    result = populate_unreleased(text, "")
    assert result == (
        "# Changelog\n\n## [Unreleased]\n\nNo changes yet.\n\n"
        "[Unreleased]: https://github.com/owner/repo/compare/v1.0.0...HEAD\n"
    )


def test_missing_unreleased_goes_after_intro_paragraph():
    text = "# Changelog\n\nSome intro.\n\n## [1.0.0] - 2024-01-01\n\n- Entry\n"
    result = populate_unreleased(text, "abc1234|feat: add feature|||END|||")
    assert result == (
        "# Changelog\n\nSome intro.\n\n"
        "## [Unreleased]\n\n### Added\n- add feature (abc1234)\n\n"
        "## [1.0.0] - 2024-01-01\n\n- Entry\n"
    )


def test_missing_unreleased_without_blank_line_goes_before_first_version():
    text = "# Changelog\n## [1.0.0] - 2024-01-01\n- Entry"
    result = populate_unreleased(text, "")
    assert result == (
        "# Changelog\n\n## [Unreleased]\n\nNo changes yet.\n\n"
        "## [1.0.0] - 2024-01-01\n- Entry"
    )
    assert populate_unreleased(result, "") == result


def test_appends_unreleased_when_document_has_no_blank_line():
    result = populate_unreleased("Initial changelog content", "abc1234|feat: add feature|||END|||")
    assert result.startswith("Initial changelog content\n\n## [Unreleased]")


def test_empty_document_becomes_the_unreleased_section():
    assert populate_unreleased("", "") == "## [Unreleased]\n\nNo changes yet.\n\n"


def test_intro_survives_repeated_populate_without_unreleased():
    text = "# Changelog\n\nSome intro.\n\n## [1.0.0] - 2024-01-01\n\n- Entry\n"
    once = populate_unreleased(text, "abc1234|fix: repair|||END|||")
    twice = populate_unreleased(once, "")
    assert twice.startswith("# Changelog\n\nSome intro.\n\n## [Unreleased]\n\nNo changes yet.\n\n")


def test_breaking_commit_counts_once(caplog):
    log = "abc1234|feat!: new API|||END|||def5678|fix: repair|||END|||"
    assert len(collect_fragments(log)) == 2
    with caplog.at_level("INFO"):
        populate_unreleased("# Changelog\n\n## [Unreleased]\n\n", log)
    assert "Rendered [Unreleased] section. | changes=2" in caplog.text


def test_skipped_and_ignored_commits_are_not_counted():
    log = "abc1234|feat: x [skip-changelog]|||END|||def5678|ci: build|||END|||"
    assert collect_fragments(log) == []
