import logging

import pytest

from protonav.config import EngineConfig
from protonav.domain.actions import (
    BackAction,
    NavigateAction,
    NoAction,
    OverlayAction,
    ScrollAction,
)
from protonav.domain.defs import TransitionAnimation
from protonav.services.errors import BrokenReferenceError, UnsupportedActionError
from protonav.services.reaction_resolver import ReactionResolver
from tests.helpers.story_builders import make_graph, make_link, make_page, make_reaction, make_story


def _make_resolver(reactions, *, page_count: int = 3, config: EngineConfig | None = None):
    reported = []
    pages = [make_page(0, [make_link(0, (0, 0, 10, 10), reactions)])]
    pages.extend(make_page(index) for index in range(1, page_count))
    graph = make_graph(make_story(pages))
    resolver = ReactionResolver(graph, config, report=reported.append)
    return resolver, graph.link_by_global_index(0), reported


def test_navigate_reaction_resolves_to_typed_action() -> None:
    resolver, link, reported = _make_resolver(
        [make_reaction(0, 2, duration=0.25, anim_type=6, modal=True)]
    )

    action = resolver.resolve(link, "ON_CLICK")

    assert action == NavigateAction(
        target=2,
        animation=TransitionAnimation.SMART_ANIMATE,
        duration=0.25,
        suppress_scroll=True,
        is_modal=True,
    )
    assert reported == []


def test_first_matching_reaction_wins() -> None:
    resolver, link, _ = _make_resolver(
        [
            make_reaction(0, 1, trigger="ON_HOVER"),
            make_reaction(0, 2),
            make_reaction(0, 1),
        ]
    )

    assert resolver.resolve(link, "ON_CLICK").target == 2
    assert resolver.resolve(link, "ON_HOVER").target == 1


def test_no_matching_trigger_resolves_to_none() -> None:
    resolver, link, reported = _make_resolver([make_reaction(0, 1)])

    assert resolver.resolve(link, "ON_DRAG") is None
    assert reported == []


def test_inert_reactions_never_match() -> None:
    resolver, link, _ = _make_resolver(
        [make_reaction(0, 1, trigger=None), make_reaction(0, 2, action=None)]
    )

    assert resolver.resolve(link, "ON_CLICK") is None


def test_broken_target_is_reported_and_ignored() -> None:
    resolver, link, reported = _make_resolver([make_reaction(0, 999)])

    assert resolver.resolve(link, "ON_CLICK") is None
    assert len(reported) == 1
    assert isinstance(reported[0], BrokenReferenceError)
    assert reported[0].link_index == 0


def test_unknown_action_is_reported_as_unsupported() -> None:
    resolver, link, reported = _make_resolver([make_reaction(0, 1, action="URL")])

    assert resolver.resolve(link, "ON_CLICK") is None
    assert isinstance(reported[0], UnsupportedActionError)
    assert reported[0].raw_action == "URL"


@pytest.mark.parametrize(
    ("reaction", "expected_type"),
    [
        (make_reaction(0, 1, navigation_type="OVERLAY"), OverlayAction),
        (make_reaction(0, 1, navigation_type="SCROLL_TO"), ScrollAction),
        (make_reaction(0, None, action="BACK"), BackAction),
        (make_reaction(0, None, action="NONE"), NoAction),
    ],
)
def test_action_variants(reaction, expected_type) -> None:
    resolver, link, reported = _make_resolver([reaction])

    assert isinstance(resolver.resolve(link, "ON_CLICK"), expected_type)
    assert reported == []


def test_duration_uses_configured_threshold() -> None:
    resolver, link, _ = _make_resolver(
        [make_reaction(0, 1, duration=50)], config=EngineConfig(duration_ms_threshold=100.0)
    )

    assert resolver.resolve(link, "ON_CLICK").duration == 50.0


def test_default_reporter_logs_warning(caplog) -> None:
    pages = [make_page(0, [make_link(0, (0, 0, 10, 10), [make_reaction(0, 7)])])]
    graph = make_graph(make_story(pages))
    resolver = ReactionResolver(graph)

    with caplog.at_level(logging.WARNING, logger="protonav.services.reaction_resolver"):
        assert resolver.resolve(graph.link_by_global_index(0), "ON_CLICK") is None

    assert "missing page 7" in caplog.text
