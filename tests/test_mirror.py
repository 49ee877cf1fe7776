"""Tests for the Mirror-Madness ray tracer and game."""

from __future__ import annotations

import math

import pytest

from physics_playground.core.vector import ZERO, Vector2
from physics_playground.demos.mirror import (
    MAX_BOUNCES, RAY_FAR, Mirror, MirrorMadness, Target,
    intersect_ray_segment, path_hits, point_segment_distance, reflect,
    trace_ray,
)


def _approx(v: Vector2, x: float, y: float) -> bool:
    return v.x == pytest.approx(x, abs=1e-9) and v.y == pytest.approx(y, abs=1e-9)


class TestIntersection:
    def test_hit(self):
        hit = intersect_ray_segment(ZERO, Vector2(1.0, 0.0),
                                    Vector2(10.0, -5.0), Vector2(10.0, 5.0))
        assert hit is not None
        t, u = hit
        assert t == pytest.approx(10.0)
        assert u == pytest.approx(0.5)

    def test_parallel_misses(self):
        assert intersect_ray_segment(ZERO, Vector2(1.0, 0.0),
                                     Vector2(0.0, 1.0), Vector2(10.0, 1.0)) is None

    def test_behind_origin_misses(self):
        assert intersect_ray_segment(ZERO, Vector2(1.0, 0.0),
                                     Vector2(-10.0, -5.0), Vector2(-10.0, 5.0)) is None

    def test_past_segment_end_misses(self):
        assert intersect_ray_segment(ZERO, Vector2(1.0, 0.0),
                                     Vector2(10.0, 1.0), Vector2(10.0, 5.0)) is None


class TestReflect:
    def test_head_on(self):
        assert _approx(reflect(Vector2(1.0, 0.0), Vector2(-1.0, 0.0)), -1.0, 0.0)

    def test_normal_is_normalized(self):
        assert _approx(reflect(Vector2(1.0, 0.0), Vector2(-5.0, 0.0)), -1.0, 0.0)

    def test_glancing(self):
        d = Vector2(1.0, -1.0).normalized()
        r = reflect(d, Vector2(0.0, 1.0))
        assert _approx(r, d.x, -d.y)
        assert r.length() == pytest.approx(1.0)


class TestTraceRay:
    def test_no_mirrors_extends_far(self):
        path = trace_ray(ZERO, Vector2(2.0, 0.0), [])
        assert len(path) == 2
        assert _approx(path[1], RAY_FAR, 0.0)

    def test_perpendicular_mirror_sends_beam_back(self):
        mirror = Mirror(Vector2(100.0, 0.0), math.pi / 2, 50.0)
        path = trace_ray(ZERO, Vector2(1.0, 0.0), [mirror])
        assert len(path) == 3
        assert _approx(path[1], 100.0, 0.0)
        back = (path[2] - path[1]).normalized()
        assert _approx(back, -1.0, 0.0)

    def test_forty_five_degree_turn(self):
        mirror = Mirror(Vector2(100.0, 0.0), math.radians(45.0), 50.0)
        path = trace_ray(ZERO, Vector2(1.0, 0.0), [mirror])
        leg = (path[2] - path[1]).normalized()
        assert leg.x == pytest.approx(0.0, abs=1e-9)
        assert abs(leg.y) == pytest.approx(1.0)

    def test_bounce_depth_is_bounded(self):
        left = Mirror(Vector2(0.0, 0.0), math.pi / 2, 100.0)
        right = Mirror(Vector2(100.0, 0.0), math.pi / 2, 100.0)
        path = trace_ray(Vector2(50.0, 0.0), Vector2(1.0, 0.0), [left, right])
        assert len(path) == 1 + MAX_BOUNCES
        assert _approx(path[1], 100.0, 0.0)
        assert _approx(path[2], 0.0, 0.0)

    def test_custom_depth(self):
        left = Mirror(Vector2(0.0, 0.0), math.pi / 2, 100.0)
        right = Mirror(Vector2(100.0, 0.0), math.pi / 2, 100.0)
        path = trace_ray(Vector2(50.0, 0.0), Vector2(1.0, 0.0), [left, right],
                         max_bounces=3)
        assert len(path) == 4


class TestTargets:
    def test_point_segment_distance(self):
        a, b = Vector2(0.0, 0.0), Vector2(10.0, 0.0)
        assert point_segment_distance(Vector2(5.0, 3.0), a, b) == pytest.approx(3.0)
        assert point_segment_distance(Vector2(-4.0, 3.0), a, b) == pytest.approx(5.0)
        assert point_segment_distance(Vector2(1.0, 1.0), a, a) == pytest.approx(math.sqrt(2))

    def test_path_hits(self):
        path = [Vector2(0.0, 0.0), Vector2(100.0, 0.0), Vector2(100.0, 100.0)]
        assert path_hits(path, Target(Vector2(50.0, 10.0), 10.0))
        assert path_hits(path, Target(Vector2(110.0, 50.0), 12.0))
        assert not path_hits(path, Target(Vector2(50.0, 50.0), 10.0))


class TestMirrorMadness:
    def test_layout(self):
        game = MirrorMadness(800.0, 480.0)
        assert len(game.mirrors) == 4
        assert len(game.targets) == 2
        assert game.path[0] == game.source.position

    def test_slider_rotates_mirror(self):
        game = MirrorMadness()
        game.panel.set_value("mirror-0", 45)
        assert game.mirrors[0].angle == pytest.approx(math.radians(45))

    def test_reset_restores_angles(self):
        game = MirrorMadness()
        defaults = [m.angle for m in game.mirrors]
        game.set_mirror_angle(0, -80)
        game.set_mirror_angle(3, 80)
        game.panel.click("reset")
        assert [m.angle for m in game.mirrors] == defaults

    def test_hit_flags_follow_path(self):
        game = MirrorMadness()
        # No mirrors: the beam runs straight across the canvas.
        game.mirrors = []
        game.targets[0].position = Vector2(600.0, game.source.position.y + 5.0)
        game.trace()
        assert game.targets[0].hit
        assert not game.targets[1].hit
        assert game.hit_count == 1
        assert not game.solved

    def test_badges(self):
        from physics_playground.core.canvas import Surface

        game = MirrorMadness()
        surface = Surface(game.width, game.height)
        surface.apply_size()
        game.draw(surface, surface.context, 0.016)
        texts = game.panel.badge_texts()
        assert texts["targets"] == f"{game.hit_count}/2"
        assert texts["status"] in ("All targets lit!", "Aim the beam")
