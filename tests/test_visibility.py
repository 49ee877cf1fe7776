"""Tests for the tab to canvas mapping and the visibility controller."""

from __future__ import annotations

from physics_playground.core.canvas import Surface
from physics_playground.simulation.runner import CanvasRunner
from physics_playground.simulation.visibility import (
    ALL_CANVASES, AMBIENT, GLIDER, MIRROR, PENDULUM, PROJECTILE, RC_CIRCUIT,
    TAB_CANVASES, TORQUE, WAVE, SelectableCanvas, VisibilityController,
    running_set,
)


def _controller():
    controller = VisibilityController()
    for cid in ALL_CANVASES:
        runner = CanvasRunner(Surface(10.0, 10.0), lambda s, ctx, dt: None,
                              clock=lambda: 0.0, name=cid)
        controller.register(cid, runner)
    return controller


class TestRunningSet:
    def test_fixed_tabs(self):
        assert running_set("home") == {AMBIENT}
        assert running_set("about") == frozenset()

    def test_selectable_tabs_default(self):
        assert running_set("games") == {GLIDER}
        assert running_set("simulations") == {PROJECTILE}

    def test_selectable_tabs(self):
        assert running_set("games", "torque") == {TORQUE}
        assert running_set("games", "mirror") == {MIRROR}
        assert running_set("simulations", "pendulum") == {PENDULUM}
        assert running_set("simulations", "rc") == {RC_CIRCUIT}
        assert running_set("simulations", "wave") == {WAVE}

    def test_unknown_names_map_to_nothing(self):
        assert running_set("settings") == frozenset()
        assert running_set(None) == frozenset()
        assert running_set("games", "pong") == frozenset()

    def test_every_canvas_reachable(self):
        reachable = set()
        for tab, entry in TAB_CANVASES.items():
            if isinstance(entry, SelectableCanvas):
                for sub in entry.options:
                    reachable |= running_set(tab, sub)
            else:
                reachable |= running_set(tab)
        assert reachable == set(ALL_CANVASES)


class TestVisibilityController:
    def test_activate_runs_exactly_the_mapped_set(self):
        controller = _controller()
        controller.activate("games", "mirror")
        assert controller.running_ids() == {MIRROR}
        assert controller.active_tab == "games"
        assert controller.active_subtab == "mirror"

    def test_switching_tabs_stops_previous(self):
        controller = _controller()
        controller.activate("home")
        assert controller.running_ids() == {AMBIENT}
        controller.activate("simulations")
        assert controller.running_ids() == {PROJECTILE}
        assert not controller.runner(AMBIENT).running

    def test_group_never_runs_two_canvases(self):
        controller = _controller()
        for sub in ("glider", "torque", "mirror", "torque", "glider"):
            controller.activate("games", sub)
            assert len(controller.running_ids()) == 1

    def test_about_stops_everything(self):
        controller = _controller()
        controller.activate("games")
        controller.activate("about")
        assert controller.running_ids() == frozenset()

    def test_unknown_tab_stops_everything(self):
        controller = _controller()
        controller.activate("home")
        controller.activate("nowhere")
        assert controller.running_ids() == frozenset()

    def test_reactivating_same_tab_keeps_runner_going(self):
        controller = _controller()
        controller.activate("home")
        runner = controller.runner(AMBIENT)
        runner.tick(0.01)
        controller.activate("home")
        assert runner.running
        assert runner.frame_count == 1

    def test_canvas_ids(self):
        controller = _controller()
        assert controller.canvas_ids() == list(ALL_CANVASES)
