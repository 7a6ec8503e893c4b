def test_import_protonav_package() -> None:
    import importlib

    module = importlib.import_module("protonav")
    assert module is not None
    assert hasattr(module, "NavigationController")


def test_import_scheduler_no_side_effects() -> None:
    from protonav.services.transition_scheduler import TransitionScheduler

    scheduler = TransitionScheduler()
    assert scheduler.state == "idle"
