import math

import pytest

from protonav.domain.defs import TransitionAnimation
from protonav.services.errors import ConcurrentTransitionRejected
from protonav.services.navigation_events import (
    TransitionFinishedEvent,
    TransitionProgressEvent,
    TransitionStartedEvent,
)
from protonav.services.transition_scheduler import (
    TransitionScheduler,
    ease,
    normalize_duration,
)


def _make_scheduler() -> tuple[TransitionScheduler, list]:
    events: list = []
    return TransitionScheduler(events.append), events


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (0.3, 0.3),
        (300, 0.3),
        (10, 10.0),
        (10.5, 0.0105),
        (0, 0.0),
        (-1, 0.0),
        (math.nan, 0.0),
        ("0.3", 0.0),
        (True, 0.0),
    ],
)
def test_normalize_duration(raw, expected) -> None:
    assert normalize_duration(raw) == pytest.approx(expected)


def test_begin_transition_enters_animating_state() -> None:
    scheduler, events = _make_scheduler()

    transition = scheduler.begin_transition(0, 1, TransitionAnimation.DISSOLVE, 0.3)

    assert scheduler.state == "animating"
    assert scheduler.active is transition
    assert events == [
        TransitionStartedEvent(
            from_index=0, to_index=1, animation=TransitionAnimation.DISSOLVE, duration=0.3
        )
    ]


def test_second_transition_is_rejected_not_queued() -> None:
    scheduler, events = _make_scheduler()
    first = scheduler.begin_transition(0, 1, TransitionAnimation.DISSOLVE, 0.3)

    with pytest.raises(ConcurrentTransitionRejected):
        scheduler.begin_transition(1, 2, TransitionAnimation.DISSOLVE, 0.3)

    assert scheduler.active is first
    scheduler.advance(0.3)
    assert scheduler.state == "idle"
    assert sum(isinstance(event, TransitionStartedEvent) for event in events) == 1


def test_advance_reports_progress_until_finished() -> None:
    scheduler, events = _make_scheduler()
    scheduler.begin_transition(0, 1, TransitionAnimation.DISSOLVE, 1.0)

    scheduler.advance(0.25)
    scheduler.advance(0.25)
    scheduler.advance(0.75)

    progress = [event.fraction for event in events if isinstance(event, TransitionProgressEvent)]
    assert progress == [0.25, 0.5, 1.0]
    assert events[-1] == TransitionFinishedEvent(cancelled=False)
    assert scheduler.state == "idle"


def test_advance_while_idle_does_nothing() -> None:
    scheduler, events = _make_scheduler()

    scheduler.advance(1.0)

    assert events == []


def test_negative_advance_is_refused() -> None:
    scheduler, _ = _make_scheduler()
    scheduler.begin_transition(0, 1, TransitionAnimation.DISSOLVE, 1.0)

    with pytest.raises(ValueError):
        scheduler.advance(-0.1)


def test_zero_duration_resolves_synchronously() -> None:
    scheduler, events = _make_scheduler()

    transition = scheduler.begin_transition(0, 1, TransitionAnimation.PUSH, 0)

    assert scheduler.state == "idle"
    assert transition.finished and not transition.cancelled
    assert isinstance(events[-1], TransitionFinishedEvent)


def test_cancel_returns_to_idle() -> None:
    scheduler, events = _make_scheduler()
    transition = scheduler.begin_transition(0, 1, TransitionAnimation.DISSOLVE, 0.3)

    assert scheduler.cancel() is True

    assert scheduler.state == "idle"
    assert transition.cancelled
    assert events[-1] == TransitionFinishedEvent(cancelled=True)
    assert scheduler.cancel() is False


def test_begin_transition_takes_seconds_as_given() -> None:
    scheduler, _ = _make_scheduler()

    transition = scheduler.begin_transition(0, 1, TransitionAnimation.DISSOLVE, 12.0)

    assert transition.duration == pytest.approx(12.0)
    assert scheduler.is_animating


def test_begin_transition_treats_negative_duration_as_zero() -> None:
    scheduler, _ = _make_scheduler()

    transition = scheduler.begin_transition(0, 1, TransitionAnimation.DISSOLVE, -1.0)

    assert transition.duration == 0.0
    assert scheduler.state == "idle"


def test_custom_threshold_changes_unit_detection() -> None:
    scheduler = TransitionScheduler(duration_ms_threshold=100.0)

    assert scheduler.normalize(50) == 50.0
    assert scheduler.normalize(500) == pytest.approx(0.5)


@pytest.mark.parametrize("animation", list(TransitionAnimation))
def test_easing_endpoints(animation) -> None:
    assert ease(animation, 0.0) == pytest.approx(0.0)
    assert ease(animation, 1.0) == pytest.approx(1.0)


def test_easing_shapes() -> None:
    assert ease(TransitionAnimation.DISSOLVE, 0.5) == 0.5
    assert ease(TransitionAnimation.SLIDE_IN, 0.5) == pytest.approx(0.875)
    assert ease(TransitionAnimation.SMART_ANIMATE, 0.5) == pytest.approx(0.5)
    assert ease(TransitionAnimation.SMART_ANIMATE, 0.25) == pytest.approx(0.0625)
