"""End-to-end navigation over the bundled ColorPicker prototype."""
from __future__ import annotations

import pytest

from protonav import NavigationController, StoryGraph, StoryRepository


@pytest.fixture(scope="module")
def graph() -> StoryGraph:
    return StoryGraph(StoryRepository().get("color_picker"))


def _click(controller: NavigationController, x: float, y: float) -> None:
    controller.pointer_down(x, y)
    controller.pointer_up(x, y)
    controller.tick(1.0)


def test_graph_warns_about_millisecond_duration(graph: StoryGraph) -> None:
    assert [issue.code for issue in graph.warnings] == ["DURATION_UNIT_AMBIGUOUS"]


def test_menu_loop_returns_to_main_menu(graph: StoryGraph) -> None:
    controller = NavigationController(graph)
    titles = [controller.current_page().title]

    # right arrow three times: color picker -> caliper -> settings -> color picker
    for _ in range(3):
        _click(controller, 290, 135)
        titles.append(controller.current_page().title)

    assert titles == [
        "MainMenu/Color_picker",
        "MainMenu/Measure_Caliper",
        "MainMenu/Settings",
        "MainMenu/Color_picker",
    ]
    assert controller.history == (0, 4, 8)


def test_drill_down_and_back(graph: StoryGraph) -> None:
    controller = NavigationController(graph)

    _click(controller, 100, 130)
    assert controller.current_page_index == 1
    _click(controller, 150, 80)
    assert controller.current_page().title == "MainMenu/Color_picker/Saved_Colors"

    controller.back()
    controller.back()
    assert controller.current_page_index == 0
    controller.back()
    assert controller.current_page_index == 0


def test_restart_starts_a_fresh_history(graph: StoryGraph) -> None:
    controller = NavigationController(graph)
    _click(controller, 100, 130)
    controller.restart()
    _click(controller, 290, 135)
    assert controller.current_page_index == 4

    assert controller.history == (0,)
    assert graph.outgoing_targets(9) == []
