import warnings

import pytest

from protonav.data.repositories import StoryRepository
from protonav.services.story_graph_validator import format_issue, validate_story_graph
from tests.helpers.story_builders import make_link, make_page, make_reaction, make_story


def _codes(issues) -> list[str]:
    return [issue.code for issue in issues]


def test_clean_story_has_no_issues() -> None:
    pages = [
        make_page(0, [make_link(0, (0, 0, 10, 10), [make_reaction(0, 1)])]),
        make_page(1, [make_link(1, (0, 0, 10, 10), [make_reaction(1, 0)])]),
    ]

    assert validate_story_graph(make_story(pages)) == []


def test_empty_story_is_an_error() -> None:
    issues = validate_story_graph(make_story([]))

    assert _codes(issues) == ["EMPTY_STORY"]
    assert issues[0].severity == "ERROR"


def test_page_index_must_match_position() -> None:
    issues = validate_story_graph(make_story([make_page(0), make_page(2)]))

    assert "PAGE_INDEX_MISMATCH" in _codes(issues)


def test_negative_rect_is_an_error() -> None:
    pages = [make_page(0, [make_link(0, (0, 0, -5, 10), [])])]

    issues = validate_story_graph(make_story(pages))

    assert _codes(issues) == ["NEGATIVE_RECT"]


def test_runtime_problems_are_warnings() -> None:
    pages = [
        make_page(
            0,
            [
                make_link(0, (0, 0, 10, 10), [make_reaction(0, 42)]),
                make_link(1, (0, 20, 10, 10), [make_reaction(0, 1, action="URL")]),
                make_link(2, (0, 40, 10, 10), [make_reaction(0, 1, trigger=None)]),
                make_link(3, (0, 60, 10, 10), [make_reaction(0, 1, duration=300)]),
            ],
        ),
        make_page(1),
        make_page(2, title="Orphan"),
    ]

    issues = validate_story_graph(make_story(pages))

    assert {issue.severity for issue in issues} == {"WARN"}
    assert _codes(issues) == [
        "BROKEN_FRAME_REF",
        "UNSUPPORTED_ACTION",
        "INERT_REACTION",
        "DURATION_UNIT_AMBIGUOUS",
        "UNREACHABLE_PAGE",
    ]
    assert issues[-1].context["title"] == "Orphan"


def test_format_issue_includes_context() -> None:
    issues = validate_story_graph(make_story([make_page(0)], start_page_index=1))

    assert format_issue(issues[0]) == (
        "[ERROR] INVALID_START_PAGE: startPageIndex does not reference a page. "
        "(start_page_index=1 page_count=1)"
    )


def test_bundled_prototypes_validate_cleanly() -> None:
    repo = StoryRepository()
    stories = repo.all()
    assert stories

    for story in stories:
        issues = validate_story_graph(story)
        errors = [issue for issue in issues if issue.severity == "ERROR"]
        for issue in issues:
            if issue.severity == "WARN":
                warnings.warn(format_issue(issue), stacklevel=2)
        if errors:
            pytest.fail(
                "Prototype graph validation errors:\n"
                + "\n".join(format_issue(issue) for issue in errors)
            )
