"""Tests for boot wiring, settings and logging setup."""

from __future__ import annotations

import logging

import pytest

from physics_playground.boot import AMBIENT_HEIGHT, boot
from physics_playground.config import Settings
from physics_playground.logging_config import setup_logging
from physics_playground.simulation.visibility import (
    ALL_CANVASES, AMBIENT, GLIDER, RC_CIRCUIT, TORQUE, WAVE,
)


class FakeClock:
    def __init__(self, t: float = 0.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t


class TestBoot:
    def test_all_demos_wired(self):
        site = boot(Settings())
        assert set(site.demos) == set(ALL_CANVASES)
        assert site.controller.canvas_ids() == list(ALL_CANVASES)

    def test_only_home_runs_initially(self):
        site = boot(Settings())
        assert site.controller.running_ids() == {AMBIENT}
        assert site.controller.active_tab == "home"

    def test_missing_canvases_are_skipped(self):
        site = boot(Settings(), available=[AMBIENT, GLIDER])
        assert set(site.demos) == {AMBIENT, GLIDER}
        site.activate("simulations")
        assert site.controller.running_ids() == frozenset()

    def test_demo_sizes_follow_settings(self):
        site = boot(Settings(canvas_width=640.0, canvas_height=360.0, wave_step=8))
        assert site.runner(GLIDER).surface.width == 640.0
        assert site.runner(GLIDER).surface.height == 360.0
        assert site.runner(AMBIENT).surface.height == AMBIENT_HEIGHT
        assert site.demos[WAVE].step == 8

    def test_pixel_ratio(self):
        site = boot(Settings(pixel_ratio=2.0))
        runner = site.runner(TORQUE)
        assert runner.surface.backing_width == 1600
        assert runner.context.transform[0] == 2.0

    def test_tick_only_visible(self):
        clock = FakeClock(0.0)
        site = boot(Settings(), clock=clock)
        assert site.tick(AMBIENT, now=0.016) is not None
        assert site.tick(GLIDER, now=0.016) is None

    def test_tick_forwards_keys(self):
        clock = FakeClock(0.0)
        site = boot(Settings(), clock=clock)
        site.activate("games", "glider")
        site.tick(GLIDER, now=0.016, keys=["n"])
        assert site.demos[GLIDER].level == 2

    def test_panel_events(self):
        site = boot(Settings())
        assert site.set_value(RC_CIRCUIT, "resistance", 500) == 100
        assert site.demos[RC_CIRCUIT].resistance_kohm == 100
        site.click(TORQUE, "add")
        torque = site.demos[TORQUE]
        assert len(torque.masses) == 2
        site.drag(TORQUE, "mass-1", torque.pivot.x + 50.0, torque.pivot.y)
        assert torque.masses[1].offset == pytest.approx(50.0)

    def test_resize_all(self):
        site = boot(Settings())
        site.resize(500.0)
        for cid in ALL_CANVASES:
            assert site.runner(cid).surface.width == 500.0
        assert site.runner(AMBIENT).surface.height == AMBIENT_HEIGHT
        assert site.demos[GLIDER].width == 500.0


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("PORT", "PLAYGROUND_HOST", "PLAYGROUND_DEBUG", "PLAYGROUND_FRAME_MS",
                     "PLAYGROUND_SEED", "PLAYGROUND_PIXEL_RATIO", "PLAYGROUND_WAVE_STEP",
                     "PLAYGROUND_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        s = Settings.from_env()
        assert s == Settings()
        assert s.port == 7860
        assert s.frame_ms == 33

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "8050")
        monkeypatch.setenv("PLAYGROUND_DEBUG", "yes")
        monkeypatch.setenv("PLAYGROUND_SEED", "99")
        monkeypatch.setenv("PLAYGROUND_PIXEL_RATIO", "1.5")
        monkeypatch.setenv("PLAYGROUND_LOG_LEVEL", "debug")
        s = Settings.from_env()
        assert s.port == 8050
        assert s.debug is True
        assert s.seed == 99
        assert s.pixel_ratio == 1.5
        assert s.log_level == logging.DEBUG

    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("PLAYGROUND_LOG_LEVEL", "chatty")
        assert Settings.from_env().log_level == logging.INFO


class TestLogging:
    def test_setup_is_idempotent(self):
        setup_logging(logging.DEBUG)
        setup_logging(logging.WARNING)
        logger = logging.getLogger("physics_playground")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_log_file(self, tmp_path):
        path = tmp_path / "playground.log"
        setup_logging(logging.INFO, log_file=str(path))
        logger = logging.getLogger("physics_playground")
        assert len(logger.handlers) == 2
        logging.getLogger("physics_playground.boot").info("hello")
        for h in logger.handlers:
            h.flush()
        assert "hello" in path.read_text(encoding="utf-8")
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
