"""Tests for the Dash page structure and its server-side callbacks."""

from __future__ import annotations

import pytest
from dash import no_update

from physics_playground.boot import boot
from physics_playground.config import Settings
from physics_playground.simulation.visibility import ALL_CANVASES, AMBIENT, TORQUE, WAVE
from physics_playground.visualization import dash_app


def _walk(component):
    yield component
    children = getattr(component, "children", None)
    if children is None or isinstance(children, (str, int, float)):
        return
    if not isinstance(children, (list, tuple)):
        children = [children]
    for child in children:
        if child is not None and not isinstance(child, (str, int, float)):
            yield from _walk(child)


def _ids(layout, kind):
    return [
        c.id["canvas"] for c in _walk(layout)
        if isinstance(getattr(c, "id", None), dict) and c.id.get("type") == kind
    ]


class TestDashLayout:
    def test_every_canvas_has_graph_and_clock(self):
        layout = dash_app.app.layout()
        assert sorted(_ids(layout, "canvas")) == sorted(ALL_CANVASES)
        assert sorted(_ids(layout, "frame-clock")) == sorted(ALL_CANVASES)

    def test_only_home_clock_enabled_at_start(self):
        layout = dash_app.app.layout()
        enabled = [
            c.id["canvas"] for c in _walk(layout)
            if isinstance(getattr(c, "id", None), dict)
            and c.id.get("type") == "frame-clock" and not c.disabled
        ]
        assert enabled == [AMBIENT]

    def test_controls_rendered_from_panels(self):
        layout = dash_app.app.layout()
        sliders = {
            (c.id["canvas"], c.id["key"]) for c in _walk(layout)
            if isinstance(getattr(c, "id", None), dict) and c.id.get("type") == "ctl-slider"
        }
        assert ("projectile-canvas", "angle") in sliders
        assert ("mirror-canvas", "mirror-3") in sliders

    def test_canvas_width_is_clamped(self):
        assert dash_app._canvas_width(2000.0) == dash_app._settings.canvas_width
        assert dash_app._canvas_width(100.0) == dash_app.MIN_CANVAS_WIDTH
        assert dash_app._canvas_width(600.0) == 600.0 - dash_app.PAGE_GUTTER


@pytest.fixture
def site(monkeypatch):
    """A fresh site swapped in for the module-level one."""
    fresh = boot(Settings(pixel_ratio=2.0))
    monkeypatch.setattr(dash_app, "_site", fresh)
    return fresh


class TestTabCallback:
    def test_games_tab_runs_selected_game(self, site):
        cards = list(ALL_CANVASES)
        home, games, sims, about, card_styles, disabled = dash_app._apply_tabs(
            "games", "torque", "projectile", cards, cards)
        assert (home, games, sims, about) == ({"display": "none"}, {},
                                             {"display": "none"}, {"display": "none"})
        assert site.controller.running_ids() == {TORQUE}
        assert [c for c, off in zip(cards, disabled) if not off] == [TORQUE]
        assert [c for c, s in zip(cards, card_styles) if s == {}] == [TORQUE]

    def test_sims_tab_ignores_games_subtab(self, site):
        cards = list(ALL_CANVASES)
        *_sections, _styles, disabled = dash_app._apply_tabs(
            "simulations", "mirror", "wave", cards, cards)
        assert site.controller.running_ids() == {WAVE}
        assert sum(not off for off in disabled) == 1

    def test_about_stops_everything(self, site):
        cards = list(ALL_CANVASES)
        *sections, _styles, disabled = dash_app._apply_tabs(
            "about", "glider", "projectile", cards, cards)
        assert sections[3] == {}
        assert site.controller.running_ids() == frozenset()
        assert all(disabled)


class TestTorqueDragCallback:
    def _mass_shape(self, site, name):
        runner = site.runner(TORQUE)
        for i in range(len(runner.context.shapes)):
            if runner.context.shape_name(i) == name:
                return i
        raise AssertionError(f"{name} not drawn")

    def test_drag_moves_mass(self, site):
        site.activate("games", "torque")
        site.click(TORQUE, "add")
        site.tick(TORQUE, now=site.runner(TORQUE).last_frame_time + 0.016)
        torque = site.demos[TORQUE]
        index = self._mass_shape(site, "mass-1")

        # backing pixels are twice the logical size
        cx, cy = torque.pivot.x + 60.0, torque.pivot.y
        relayout = {
            f"shapes[{index}].x0": 2 * (cx - 10), f"shapes[{index}].x1": 2 * (cx + 10),
            f"shapes[{index}].y0": 2 * (cy - 10), f"shapes[{index}].y1": 2 * (cy + 10),
        }
        assert dash_app.torque_drag(relayout) == ["mass-1"]
        assert torque.masses[1].offset == pytest.approx(torque.lever_offset(cx, cy))

    def test_partial_or_unrelated_edits_are_ignored(self, site):
        site.activate("games", "torque")
        site.tick(TORQUE, now=site.runner(TORQUE).last_frame_time + 0.016)
        before = [m.offset for m in site.demos[TORQUE].masses]
        assert dash_app.torque_drag({"shapes[0].x0": 10.0}) is no_update
        assert dash_app.torque_drag({"xaxis.range[0]": 0.0}) is no_update
        assert dash_app.torque_drag({"shapes[999].x0": 1, "shapes[999].x1": 2,
                                     "shapes[999].y0": 1, "shapes[999].y1": 2}) is no_update
        assert [m.offset for m in site.demos[TORQUE].masses] == before
