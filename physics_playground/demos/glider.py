"""Space-Glider: steer a ship through gravity wells and collect orbs.

Wells pull the ship with an inverse-square acceleration, floored at a
minimum distance so nothing blows up near a well centre.  Touching a well
restarts the level; collecting every orb wins (shown in the status badge).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..core.canvas import Context2D, Surface
from ..core.panel import Panel
from ..core.rng import RandomStream
from ..core.vector import ZERO, Vector2
from .base import AMBER, BLUE, Demo, FG, MUTED, RED, ACCENT, GREEN

logger = logging.getLogger(__name__)

G = 1.0
MIN_DIST = 30.0
SHIP_RADIUS = 10.0
ORB_RADIUS = 8.0
ORB_SCORE = 10
THRUST = 140.0
BOOST_FACTOR = 1.8
FUEL_DRAIN = 10.0   # percent per second
BOOST_DRAIN = 25.0
TURN_RATE = 3.2     # rad/s
RESTITUTION = 0.6
FULL_FUEL = 100.0
CRASH_FLASH = 1.5

# level -> (wells, orbs)
LEVELS = {1: (2, 5), 2: (4, 8)}


@dataclass
class Well:
    position: Vector2
    mass: float
    radius: float


@dataclass
class Orb:
    position: Vector2
    collected: bool = False
    radius: float = ORB_RADIUS


@dataclass
class Ship:
    position: Vector2
    velocity: Vector2 = ZERO
    acceleration: Vector2 = ZERO
    heading: float = 0.0
    angular_velocity: float = 0.0
    fuel: float = FULL_FUEL
    score: int = 0
    radius: float = SHIP_RADIUS


@dataclass
class GliderInput:
    thrust: bool = False
    left: bool = False
    right: bool = False
    boost: bool = False


def gravity_at(point: Vector2, wells: list[Well]) -> Vector2:
    """Sum of well accelerations acting at *point*."""
    acc = ZERO
    for w in wells:
        d = w.position - point
        a = G * w.mass / max(MIN_DIST * MIN_DIST, d.length_sq())
        acc = acc + d.normalized() * a
    return acc


class SpaceGlider(Demo):
    canvas_id = "glider-canvas"
    title = "Space-Glider"

    def __init__(self, width: float = 800.0, height: float = 480.0,
                 seed: int = 1337, level: int = 1) -> None:
        self.width = float(width)
        self.height = float(height)
        self.seed = seed
        self.level = level if level in LEVELS else 1
        self.controls = GliderInput()
        self.crashes = 0
        self.flash = 0.0
        self._prev_keys: frozenset[str] = frozenset()
        self.ship = Ship(position=ZERO)
        self.wells: list[Well] = []
        self.orbs: list[Orb] = []
        self.reset_level()
        super().__init__()

    # ------------------------------------------------------------------
    # Level setup
    # ------------------------------------------------------------------

    def _start_position(self) -> Vector2:
        return Vector2(self.width * 0.12, self.height * 0.5)

    def _place(
        self,
        rng: RandomStream,
        x_range: tuple[float, float],
        y_range: tuple[float, float],
        ok: Callable[[Vector2], bool],
        attempts: int = 30,
    ) -> Vector2:
        p = ZERO
        for _ in range(attempts):
            p = Vector2(rng.uniform(*x_range) * self.width,
                        rng.uniform(*y_range) * self.height)
            if ok(p):
                return p
        logger.debug("no free spot after %d attempts on level %d, using (%.0f, %.0f)",
                     attempts, self.level, p.x, p.y)
        return p

    def reset_level(self) -> None:
        """Reinitialize ship, wells and orbs for the current level."""
        n_wells, n_orbs = LEVELS[self.level]
        rng = RandomStream(self.seed * 31 + self.level)
        start = self._start_position()
        self.ship = Ship(position=start)

        self.wells = []
        for _ in range(n_wells):
            mass = rng.uniform(1.5e5, 3.5e5)
            radius = 12.0 + mass / 2.5e4
            pos = self._place(
                rng, (0.3, 0.9), (0.15, 0.85),
                lambda p: p.distance_to(start) > radius + 80.0
                and all(p.distance_to(w.position) > radius + w.radius + 40.0
                        for w in self.wells),
            )
            self.wells.append(Well(pos, mass, radius))

        self.orbs = []
        for _ in range(n_orbs):
            pos = self._place(
                rng, (0.08, 0.95), (0.08, 0.92),
                lambda p: p.distance_to(start) > 40.0
                and all(p.distance_to(w.position) > w.radius + ORB_RADIUS + 20.0
                        for w in self.wells),
            )
            self.orbs.append(Orb(pos))

    def restart(self) -> None:
        self.flash = 0.0
        self.reset_level()

    def next_level(self) -> None:
        self.level = 2 if self.level == 1 else 1
        self.flash = 0.0
        self.reset_level()
        logger.info("glider switched to level %d", self.level)

    @property
    def all_collected(self) -> bool:
        return bool(self.orbs) and all(o.collected for o in self.orbs)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_keys(self, keys: frozenset[str]) -> None:
        held = frozenset(k.lower() for k in keys)
        self.controls = GliderInput(
            thrust="arrowup" in held or "w" in held,
            left="arrowleft" in held or "a" in held,
            right="arrowright" in held or "d" in held,
            boost="shift" in held,
        )
        pressed = held - self._prev_keys
        self._prev_keys = held
        if "r" in pressed:
            self.restart()
        if "n" in pressed:
            self.next_level()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        ship = self.ship
        c = self.controls
        self.flash = max(0.0, self.flash - dt)

        acc = gravity_at(ship.position, self.wells)

        if c.thrust and ship.fuel > 0:
            thrust = THRUST * (BOOST_FACTOR if c.boost else 1.0)
            acc = acc + Vector2.from_angle(ship.heading, thrust)
            drain = BOOST_DRAIN if c.boost else FUEL_DRAIN
            ship.fuel = max(0.0, ship.fuel - drain * dt)

        ship.angular_velocity = TURN_RATE * (int(c.right) - int(c.left))
        ship.heading += ship.angular_velocity * dt

        ship.acceleration = acc
        ship.velocity = ship.velocity + acc * dt
        ship.position = ship.position + ship.velocity * dt
        self._bounce()

        for orb in self.orbs:
            if not orb.collected and ship.position.distance_to(orb.position) < orb.radius + ship.radius:
                orb.collected = True
                ship.score += ORB_SCORE

        for w in self.wells:
            if ship.position.distance_to(w.position) <= w.radius + ship.radius:
                self.crashes += 1
                logger.info("glider crashed into a well, resetting level %d", self.level)
                self.reset_level()
                self.flash = CRASH_FLASH
                break

    def _bounce(self) -> None:
        ship = self.ship
        r = ship.radius
        x, y = ship.position
        vx, vy = ship.velocity
        if x < r:
            x, vx = r, abs(vx) * RESTITUTION
        elif x > self.width - r:
            x, vx = self.width - r, -abs(vx) * RESTITUTION
        if y < r:
            y, vy = r, abs(vy) * RESTITUTION
        elif y > self.height - r:
            y, vy = self.height - r, -abs(vy) * RESTITUTION
        ship.position = Vector2(x, y)
        ship.velocity = Vector2(vx, vy)

    def on_resize(self, surface: Surface, ctx: Context2D) -> None:
        super().on_resize(surface, ctx)
        self.reset_level()

    # ------------------------------------------------------------------
    # Panel & rendering
    # ------------------------------------------------------------------

    def build_panel(self, panel: Panel) -> None:
        panel.button("restart", "Restart", self.restart, variant="primary")
        panel.button("next-level", "Next level", self.next_level)
        panel.badge("score", "Score")
        panel.badge("fuel", "Fuel")
        panel.badge("level", "Level")
        panel.badge("status", "Status")

    def status(self) -> str:
        if self.flash > 0:
            return "Crashed! Level reset"
        if self.all_collected:
            return "All orbs collected!"
        if self.ship.fuel <= 0:
            return "Out of fuel"
        return "Collect the orbs"

    def publish(self) -> None:
        p = self.panel
        p.set_badge("score", str(self.ship.score))
        p.set_badge("fuel", f"{self.ship.fuel:.0f}%")
        p.set_badge("level", str(self.level))
        p.set_badge("status", self.status())

    def render(self, surface: Surface, ctx: Context2D) -> None:
        ctx.clear("#05050c")
        for w in self.wells:
            ctx.circle(w.position, w.radius * 2.6, stroke="rgba(124,92,252,0.25)")
            ctx.circle(w.position, w.radius * 1.6, fill="rgba(124,92,252,0.18)")
            ctx.circle(w.position, w.radius, fill=ACCENT, stroke=FG)
        for orb in self.orbs:
            if not orb.collected:
                ctx.circle(orb.position, orb.radius, fill=AMBER)

        ship = self.ship
        nose = ship.position + Vector2.from_angle(ship.heading, ship.radius * 1.4)
        left = ship.position + Vector2.from_angle(ship.heading + 2.5, ship.radius)
        right = ship.position + Vector2.from_angle(ship.heading - 2.5, ship.radius)
        if self.controls.thrust and ship.fuel > 0:
            tail = ship.position - Vector2.from_angle(
                ship.heading, ship.radius * (2.4 if self.controls.boost else 1.8))
            ctx.polygon([left, tail, right], fill=RED)
        ctx.polygon([nose, left, right], fill=BLUE if self.flash <= 0 else RED, stroke=FG)

        # Fuel gauge
        ctx.rect(12, 12, 120, 8, stroke=MUTED)
        ctx.rect(12, 12, 120 * ship.fuel / FULL_FUEL, 8,
                 fill=GREEN if ship.fuel > 25 else RED)
        ctx.text(12, 34, f"Score {ship.score}  ·  Level {self.level}", color=FG, size=12)
        if self.all_collected:
            ctx.text(self.width / 2, self.height / 2, "All orbs collected!",
                     color=GREEN, size=22, anchor="center")
        elif self.flash > 0:
            ctx.text(self.width / 2, self.height / 2, "Crashed!",
                     color=RED, size=22, anchor="center")
