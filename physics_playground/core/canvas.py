"""Drawing surface and a plotly-backed 2D drawing context.

A :class:`Surface` stands in for a browser canvas: it has a logical size
(the size it occupies on the page) and a backing size in device pixels.
Demos draw in logical coordinates through a :class:`Context2D`, which
applies its current transform and records shapes, annotations and image
traces.  :meth:`Context2D.to_figure` turns one frame of commands into a
``plotly`` figure whose y axis points down, like a canvas.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Sequence

import numpy as np
import plotly.graph_objects as go

Point = Sequence[float]
Transform = tuple[float, float, float, float, float, float]

IDENTITY: Transform = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

_LAYOUT_DEFAULTS = dict(
    template="plotly_dark",
    margin=dict(l=0, r=0, t=0, b=0),
    showlegend=False,
    dragmode=False,
    uirevision="canvas",
    hovermode=False,
)


class Context2D:
    """Immediate-mode drawing context recording one frame of commands."""

    def __init__(self, surface: Surface) -> None:
        self.surface = surface
        self.transform: Transform = IDENTITY
        self.background = "#0a0a0f"
        self._shapes: list[dict[str, Any]] = []
        self._annotations: list[dict[str, Any]] = []
        self._traces: list[Any] = []

    # ------------------------------------------------------------------
    # Transform
    # ------------------------------------------------------------------

    def set_transform(self, a: float, b: float, c: float, d: float,
                      e: float, f: float) -> None:
        self.transform = (a, b, c, d, e, f)

    def reset_transform(self) -> None:
        self.transform = IDENTITY

    def scale(self, sx: float, sy: float | None = None) -> None:
        sy = sx if sy is None else sy
        a, b, c, d, e, f = self.transform
        self.transform = (a * sx, b * sx, c * sy, d * sy, e, f)

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Map a logical point to backing-pixel coordinates."""
        a, b, c, d, e, f = self.transform
        return (a * x + c * y + e, b * x + d * y + f)

    def _scale_length(self, r: float) -> float:
        a, b, _c, _d, _e, _f = self.transform
        return r * math.hypot(a, b)

    # ------------------------------------------------------------------
    # Frame lifecycle
    # ------------------------------------------------------------------

    def begin_frame(self) -> None:
        """Drop the previous frame's commands."""
        self._shapes = []
        self._annotations = []
        self._traces = []

    def clear(self, color: str = "#0a0a0f") -> None:
        self.begin_frame()
        self.background = color

    @property
    def shapes(self) -> list[dict[str, Any]]:
        return self._shapes

    def shape_name(self, index: int) -> str | None:
        if 0 <= index < len(self._shapes):
            return self._shapes[index].get("name")
        return None

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def line(
        self,
        points: Iterable[Point],
        color: str = "#e8eaed",
        width: float = 2.0,
        dash: str | None = None,
    ) -> None:
        """Stroke a polyline through *points*."""
        pts = [self.apply(*p) for p in points]
        if len(pts) < 2:
            return
        path = "M " + " L ".join(f"{x:.2f},{y:.2f}" for x, y in pts)
        line = dict(color=color, width=width)
        if dash:
            line["dash"] = dash
        self._shapes.append(dict(type="path", path=path, line=line,
                                 xref="x", yref="y", layer="above"))

    def circle(
        self,
        center: Point,
        radius: float,
        fill: str | None = None,
        stroke: str | None = None,
        width: float = 1.0,
        name: str | None = None,
        editable: bool = False,
    ) -> None:
        cx, cy = self.apply(*center)
        r = self._scale_length(radius)
        shape: dict[str, Any] = dict(
            type="circle", xref="x", yref="y",
            x0=cx - r, y0=cy - r, x1=cx + r, y1=cy + r,
            fillcolor=fill or "rgba(0,0,0,0)",
            line=dict(color=stroke or fill or "rgba(0,0,0,0)", width=width),
            layer="above",
        )
        if name is not None:
            shape["name"] = name
        if editable:
            shape["editable"] = True
        self._shapes.append(shape)

    def rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        fill: str | None = None,
        stroke: str | None = None,
        width: float = 1.0,
    ) -> None:
        x0, y0 = self.apply(x, y)
        x1, y1 = self.apply(x + w, y + h)
        self._shapes.append(dict(
            type="rect", xref="x", yref="y",
            x0=x0, y0=y0, x1=x1, y1=y1,
            fillcolor=fill or "rgba(0,0,0,0)",
            line=dict(color=stroke or fill or "rgba(0,0,0,0)", width=width),
            layer="above",
        ))

    def polygon(self, points: Iterable[Point], fill: str,
                stroke: str | None = None) -> None:
        pts = [self.apply(*p) for p in points]
        if len(pts) < 3:
            return
        path = "M " + " L ".join(f"{x:.2f},{y:.2f}" for x, y in pts) + " Z"
        self._shapes.append(dict(
            type="path", path=path, xref="x", yref="y",
            fillcolor=fill, line=dict(color=stroke or fill, width=1),
            layer="above",
        ))

    def text(
        self,
        x: float,
        y: float,
        text: str,
        color: str = "#e8eaed",
        size: int = 13,
        anchor: str = "left",
    ) -> None:
        px, py = self.apply(x, y)
        self._annotations.append(dict(
            x=px, y=py, xref="x", yref="y", text=text, showarrow=False,
            font=dict(color=color, size=size), xanchor=anchor,
        ))

    def image(self, rgb: np.ndarray, x: float = 0.0, y: float = 0.0,
              cell: float = 1.0) -> None:
        """Blit an ``(rows, cols, 3)`` uint8 buffer, *cell* logical px per texel."""
        x0, y0 = self.apply(x, y)
        step = self._scale_length(cell)
        self._traces.append(go.Image(
            z=rgb, x0=x0 + step / 2, y0=y0 + step / 2, dx=step, dy=step,
            hoverinfo="skip",
        ))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_figure(self) -> go.Figure:
        w = self.surface.backing_width
        h = self.surface.backing_height
        fig = go.Figure(data=list(self._traces))
        fig.update_layout(
            shapes=list(self._shapes),
            annotations=list(self._annotations),
            paper_bgcolor=self.background,
            plot_bgcolor=self.background,
            width=w,
            height=h,
            xaxis=dict(range=[0, w], visible=False, fixedrange=True),
            yaxis=dict(range=[h, 0], visible=False, fixedrange=True,
                       scaleanchor="x"),
            **_LAYOUT_DEFAULTS,
        )
        return fig


class Surface:
    """Logical canvas size plus its derived backing-pixel size."""

    def __init__(self, width: float, height: float,
                 pixel_ratio: float = 1.0) -> None:
        self.width = float(width)
        self.height = float(height)
        self.pixel_ratio = float(pixel_ratio)
        self.backing_width = 0
        self.backing_height = 0
        self.context = Context2D(self)

    def apply_size(
        self,
        width: float | None = None,
        height: float | None = None,
        pixel_ratio: float | None = None,
    ) -> None:
        """Update the logical size and re-derive the backing size."""
        if width is not None:
            self.width = float(width)
        if height is not None:
            self.height = float(height)
        if pixel_ratio is not None:
            self.pixel_ratio = float(pixel_ratio)
        ratio = self.pixel_ratio if self.pixel_ratio > 0 else 1.0
        self.backing_width = max(1, int(math.floor(self.width * ratio)))
        self.backing_height = max(1, int(math.floor(self.height * ratio)))

    def __repr__(self) -> str:
        return (f"Surface({self.width:g}x{self.height:g} @{self.pixel_ratio:g}"
                f" -> {self.backing_width}x{self.backing_height})")
