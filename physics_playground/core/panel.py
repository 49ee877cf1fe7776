"""Control-panel description owned by each demo.

A demo populates its :class:`Panel` at initialization with sliders,
buttons and badges.  The UI shell renders the description and routes edits
and clicks back through :meth:`Panel.set_value` and :meth:`Panel.click`;
demos push status text with :meth:`Panel.set_badge`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class Slider:
    key: str
    label: str
    min: float
    max: float
    step: float
    value: float
    unit: str = ""
    on_change: Callable[[float], None] | None = None

    def format(self) -> str:
        digits = 0 if float(self.step).is_integer() else len(f"{self.step:g}".split(".")[-1])
        text = f"{self.value:.{digits}f}"
        return f"{text} {self.unit}".strip()


@dataclass
class Button:
    key: str
    label: str
    on_click: Callable[[], None] | None = None
    variant: str | None = None


@dataclass
class Badge:
    key: str
    label: str
    text: str = ""


@dataclass
class Panel:
    """Ordered sliders, buttons and badges for one canvas."""

    canvas_id: str
    sliders: dict[str, Slider] = field(default_factory=dict)
    buttons: dict[str, Button] = field(default_factory=dict)
    badges: dict[str, Badge] = field(default_factory=dict)

    # ── Construction ────────────────────────────────────────────────

    def slider(
        self,
        key: str,
        label: str,
        min: float,
        max: float,
        step: float,
        value: float,
        unit: str = "",
        on_change: Callable[[float], None] | None = None,
    ) -> Slider:
        if min > max:
            raise ValueError(f"slider {key!r}: min {min} > max {max}")
        if step <= 0:
            raise ValueError(f"slider {key!r}: step must be positive")
        s = Slider(key, label, min, max, step, _clamp(value, min, max),
                   unit, on_change)
        self.sliders[key] = s
        return s

    def button(
        self,
        key: str,
        label: str,
        on_click: Callable[[], None] | None = None,
        variant: str | None = None,
    ) -> Button:
        b = Button(key, label, on_click, variant)
        self.buttons[key] = b
        return b

    def badge(self, key: str, label: str, text: str = "") -> Badge:
        b = Badge(key, label, text)
        self.badges[key] = b
        return b

    # ── Events from the UI shell ────────────────────────────────────

    def set_value(self, key: str, value: float) -> float:
        """Apply an edit to slider *key*; returns the clamped value."""
        s = self.sliders[key]
        s.value = _clamp(float(value), s.min, s.max)
        if s.on_change is not None:
            s.on_change(s.value)
        return s.value

    def click(self, key: str) -> None:
        b = self.buttons[key]
        if b.on_click is not None:
            b.on_click()

    # ── Status from the demo ────────────────────────────────────────

    def set_badge(self, key: str, text: str) -> None:
        self.badges[key].text = text

    def set_label(self, key: str, label: str) -> None:
        self.buttons[key].label = label

    def badge_texts(self) -> dict[str, str]:
        return {k: b.text for k, b in self.badges.items()}


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))
