"""Interactive Dash UI for the Physics Playground.

Run with:
    python -m physics_playground.visualization.dash_app

Opens at http://127.0.0.1:7860

Every canvas gets a ``dcc.Graph`` and a ``dcc.Interval`` (its frame clock).
Only the clocks of the visible canvases are enabled; each tick advances the
matching :class:`~physics_playground.simulation.runner.CanvasRunner` by one
frame and ships the recorded figure back.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import plotly.graph_objects as go

import dash
from dash import dcc, html, ctx, Input, Output, State, MATCH, ALL, no_update

from physics_playground.boot import Site, boot
from physics_playground.config import Settings
from physics_playground.core.panel import Panel
from physics_playground.logging_config import setup_logging
from physics_playground.simulation.visibility import (
    AMBIENT, GLIDER, MIRROR, PENDULUM, PROJECTILE, RC_CIRCUIT, TORQUE, WAVE,
    TAB_CANVASES,
)
from physics_playground.visualization.series import rc_curve_frame

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════
#  Dark plotly theme
# ═══════════════════════════════════════════════════════════════════════

_LAYOUT_DEFAULTS = dict(
    template="plotly_dark",
    paper_bgcolor="#0a0a0f",
    plot_bgcolor="#0a0a0f",
    font=dict(family="Inter, -apple-system, sans-serif", color="#e8eaed"),
    margin=dict(l=40, r=20, t=40, b=40),
    height=260,
    uirevision="stable",
)

_GRAPH_CONFIG = dict(displayModeBar=False, scrollZoom=False)


# ═══════════════════════════════════════════════════════════════════════
#  Server-side state (single user)
# ═══════════════════════════════════════════════════════════════════════

_settings = Settings.from_env()
setup_logging(_settings.log_level)
_site: Site = boot(_settings)
_last_width: float | None = None

MIN_CANVAS_WIDTH = 320.0
PAGE_GUTTER = 64.0


def _canvas_width(viewport_width: float) -> float:
    return max(MIN_CANVAS_WIDTH,
               min(_settings.canvas_width, viewport_width - PAGE_GUTTER))


# ═══════════════════════════════════════════════════════════════════════
#  Dash app + dark theme
# ═══════════════════════════════════════════════════════════════════════

app = dash.Dash(
    __name__,
    title="Physics Playground",
    suppress_callback_exceptions=True,
)

app.index_string = """<!DOCTYPE html>
<html>
<head>
    {%metas%}
    <title>{%title%}</title>
    {%favicon%}
    {%css%}
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap" rel="stylesheet">
    <style>
        :root {
            --bg-base: #0a0a0f;
            --bg-surface: rgba(15, 15, 25, 0.8);
            --bg-elevated: rgba(25, 25, 45, 0.6);
            --glass-border: rgba(255, 255, 255, 0.08);
            --text-primary: #e8eaed;
            --text-secondary: #9aa0a6;
            --text-muted: #5f6368;
            --accent: #7c5cfc;
            --accent-hover: #9b7dff;
            --accent-green: #34d399;
            --accent-red: #f87171;
            --radius-sm: 8px;
            --radius-md: 12px;
            --transition: 0.2s cubic-bezier(0.4, 0, 0.2, 1);
        }
        * { box-sizing: border-box; }
        body {
            margin: 0;
            background: var(--bg-base);
            color: var(--text-primary);
            font-family: Inter, -apple-system, sans-serif;
        }
        .site { max-width: 880px; margin: 0 auto; padding: 24px 32px; }
        .site h1 { font-size: 1.8em; margin: 0 0 4px 0; }
        .subtitle { color: var(--text-secondary); margin: 0 0 18px 0; }
        .canvas-card {
            background: var(--bg-surface);
            border: 1px solid var(--glass-border);
            border-radius: var(--radius-md);
            padding: 14px;
            margin-top: 14px;
        }
        .canvas-card h3 { margin: 0 0 10px 0; font-size: 1.1em; }
        .controls { display: flex; flex-wrap: wrap; gap: 14px; margin-top: 12px; }
        .control { min-width: 200px; flex: 1; }
        .control label { color: var(--text-secondary); font-size: 0.85em; }
        .readout { color: var(--text-primary); font-variant-numeric: tabular-nums; margin-left: 6px; }
        .buttons { display: flex; gap: 8px; margin-top: 10px; }
        .buttons button {
            background: var(--bg-elevated);
            color: var(--text-primary);
            border: 1px solid var(--glass-border);
            border-radius: var(--radius-sm);
            padding: 6px 14px;
            cursor: pointer;
            transition: var(--transition);
        }
        .buttons button:hover { border-color: var(--accent-hover); }
        .buttons button.primary { background: var(--accent); border-color: var(--accent); }
        .buttons button.danger { border-color: var(--accent-red); color: var(--accent-red); }
        .badges { display: flex; flex-wrap: wrap; gap: 8px; margin-top: 10px; }
        .badge {
            background: var(--bg-elevated);
            border-radius: 999px;
            padding: 3px 12px;
            font-size: 0.85em;
            color: var(--text-secondary);
        }
        .badge span { color: var(--text-primary); margin-left: 4px; }
        .hint { color: var(--text-muted); font-size: 0.8em; margin-top: 8px; }
        .about p { color: var(--text-secondary); line-height: 1.6; }
    </style>
</head>
<body>
    {%app_entry%}
    <footer>{%config%}{%scripts%}{%renderer%}</footer>
</body>
</html>"""


# ═══════════════════════════════════════════════════════════════════════
#  Page layouts
# ═══════════════════════════════════════════════════════════════════════

_HINTS = {
    GLIDER: "Arrow keys or WASD to steer, Shift to boost, R to restart, N for the next level.",
    TORQUE: "Drag the loose masses along the lever until it balances.",
    MIRROR: "Rotate the mirrors so the beam passes through every target.",
}


def _control_panel(panel: Panel) -> html.Div:
    cid = panel.canvas_id
    sliders = [
        html.Div([
            html.Label([
                s.label,
                html.Span(s.format(), className="readout",
                          id={"type": "ctl-readout", "canvas": cid, "key": s.key}),
            ]),
            dcc.Slider(
                id={"type": "ctl-slider", "canvas": cid, "key": s.key},
                min=s.min, max=s.max, step=s.step, value=s.value,
                marks=None, updatemode="drag",
            ),
        ], className="control")
        for s in panel.sliders.values()
    ]
    buttons = [
        html.Button(
            b.label,
            id={"type": "ctl-button", "canvas": cid, "key": b.key},
            className=b.variant or "",
            n_clicks=0,
        )
        for b in panel.buttons.values()
    ]
    badges = [
        html.Div([
            b.label,
            html.Span(b.text, id={"type": "ctl-badge", "canvas": cid, "key": b.key}),
        ], className="badge")
        for b in panel.badges.values()
    ]
    return html.Div([
        html.Div(sliders, className="controls"),
        html.Div(buttons, className="buttons"),
        html.Div(badges, className="badges"),
    ])


def _canvas_card(cid: str, extra: Any = None) -> html.Div:
    """Graph, frame clock and controls of one canvas (hidden until shown)."""
    runner = _site.runner(cid)
    demo = _site.demos[cid]
    figure = runner.last_figure
    if figure is None:
        figure = go.Figure(layout=dict(template="plotly_dark",
                                       height=runner.surface.backing_height))
    children = [
        html.H3(demo.title),
        dcc.Graph(
            id={"type": "canvas", "canvas": cid},
            figure=figure,
            config=_GRAPH_CONFIG,
        ),
        dcc.Interval(
            id={"type": "frame-clock", "canvas": cid},
            interval=_settings.frame_ms,
            disabled=not runner.running,
        ),
        _control_panel(demo.panel),
    ]
    if cid in _HINTS:
        children.append(html.Div(_HINTS[cid], className="hint"))
    if extra is not None:
        children.append(extra)
    return html.Div(
        children,
        id={"type": "canvas-section", "canvas": cid},
        className="canvas-card",
        style={} if runner.running else {"display": "none"},
    )


def _subtabs(tab_id: str, group: str, labels: dict[str, str]) -> dcc.Tabs:
    entry = TAB_CANVASES[group]
    return dcc.Tabs(
        id=tab_id,
        value=entry.default,
        children=[dcc.Tab(label=labels[k], value=k) for k in entry.options],
    )


def _about_layout() -> html.Div:
    return html.Div([
        html.H2("About"),
        html.P(
            "Physics Playground is a set of small browser toys for building "
            "intuition about classical mechanics, optics, circuits and waves. "
            "Each canvas runs its own frame loop and only the one you are "
            "looking at consumes any time."
        ),
        html.P(
            "Games: steer a glider through gravity wells, balance a lever by "
            "torque, and aim a laser through a maze of mirrors.  Simulations: "
            "projectile motion with drag, a damped pendulum, an RC circuit "
            "and two-source wave interference."
        ),
    ], className="about")


def _site_layout() -> html.Div:
    return html.Div([
        html.H1("Physics Playground"),
        html.P("Interactive games and simulations for classical physics",
               className="subtitle"),

        dcc.Tabs(id="main-tabs", value="home", children=[
            dcc.Tab(label="Home", value="home"),
            dcc.Tab(label="Games", value="games"),
            dcc.Tab(label="Simulations", value="simulations"),
            dcc.Tab(label="About", value="about"),
        ]),

        html.Div(id="home-section", children=[
            _canvas_card(cid) for cid in (AMBIENT,) if cid in _site.demos
        ]),
        html.Div(id="games-section", style={"display": "none"}, children=[
            _subtabs("games-tabs", "games", {
                "glider": "Space Glider",
                "torque": "Torque Tycoon",
                "mirror": "Mirror Madness",
            }),
            *[_canvas_card(cid) for cid in (GLIDER, TORQUE, MIRROR)
              if cid in _site.demos],
        ]),
        html.Div(id="sims-section", style={"display": "none"}, children=[
            _subtabs("sims-tabs", "simulations", {
                "projectile": "Projectile",
                "pendulum": "Pendulum",
                "rc": "RC Circuit",
                "wave": "Wave Interference",
            }),
            *[
                _canvas_card(cid, extra=dcc.Graph(id="rc-scope", config=_GRAPH_CONFIG)
                             if cid == RC_CIRCUIT else None)
                for cid in (PROJECTILE, PENDULUM, RC_CIRCUIT, WAVE)
                if cid in _site.demos
            ],
        ]),
        html.Div(id="about-section", style={"display": "none"},
                 children=_about_layout()),

        # ── Browser-side input capture ──
        dcc.Store(id="held-keys", data=[]),
        dcc.Interval(id="key-poll", interval=_settings.frame_ms),
        dcc.Store(id="viewport", data=None),
        dcc.Store(id="viewport-ack", data=None),
        dcc.Interval(id="viewport-poll", interval=500),
        dcc.Store(id="drag-ack", data=None),
    ], className="site")


app.layout = _site_layout


# ═══════════════════════════════════════════════════════════════════════
#  Callbacks
# ═══════════════════════════════════════════════════════════════════════

# ── CB0: Tab change -> start/stop runners ────────────────────────────

@app.callback(
    Output("home-section", "style"),
    Output("games-section", "style"),
    Output("sims-section", "style"),
    Output("about-section", "style"),
    Output({"type": "canvas-section", "canvas": ALL}, "style"),
    Output({"type": "frame-clock", "canvas": ALL}, "disabled"),
    Input("main-tabs", "value"),
    Input("games-tabs", "value"),
    Input("sims-tabs", "value"),
)
def update_visibility(tab, games_tab, sims_tab):
    card_ids = [o["id"]["canvas"] for o in ctx.outputs_list[4]]
    clock_ids = [o["id"]["canvas"] for o in ctx.outputs_list[5]]
    return _apply_tabs(tab, games_tab, sims_tab, card_ids, clock_ids)


def _apply_tabs(tab, games_tab, sims_tab, card_ids, clock_ids):
    """Activate the selected tab and derive section styles and clock flags."""
    subtab = {"games": games_tab, "simulations": sims_tab}.get(tab)
    _site.activate(tab, subtab)
    running = _site.controller.running_ids()

    hide = {"display": "none"}
    show = {}
    sections = [
        show if tab == name else hide
        for name in ("home", "games", "simulations", "about")
    ]
    return (
        *sections,
        [show if cid in running else hide for cid in card_ids],
        [cid not in running for cid in clock_ids],
    )


# ── CB1: Frame clock -> advance one frame ────────────────────────────

@app.callback(
    Output({"type": "canvas", "canvas": MATCH}, "figure"),
    Output({"type": "ctl-badge", "canvas": MATCH, "key": ALL}, "children"),
    Input({"type": "frame-clock", "canvas": MATCH}, "n_intervals"),
    State("held-keys", "data"),
    prevent_initial_call=True,
)
def advance_frame(_n, held_keys):
    cid = ctx.triggered_id["canvas"]
    figure = _site.tick(cid, keys=held_keys or ())
    if figure is None:
        return no_update, no_update
    texts = _site.panel(cid).badge_texts()
    return figure, [texts.get(o["id"]["key"], "") for o in ctx.outputs_list[1]]


# ── CB2: Slider edit ─────────────────────────────────────────────────

@app.callback(
    Output({"type": "ctl-readout", "canvas": MATCH, "key": MATCH}, "children"),
    Input({"type": "ctl-slider", "canvas": MATCH, "key": MATCH}, "value"),
    prevent_initial_call=True,
)
def slider_change(value):
    cid, key = ctx.triggered_id["canvas"], ctx.triggered_id["key"]
    if value is None:
        return no_update
    _site.set_value(cid, key, value)
    return _site.panel(cid).sliders[key].format()


# ── CB3: Button click ────────────────────────────────────────────────

@app.callback(
    Output({"type": "ctl-button", "canvas": MATCH, "key": MATCH}, "children"),
    Input({"type": "ctl-button", "canvas": MATCH, "key": MATCH}, "n_clicks"),
    prevent_initial_call=True,
)
def button_click(n_clicks):
    cid, key = ctx.triggered_id["canvas"], ctx.triggered_id["key"]
    if not n_clicks:
        return no_update
    _site.click(cid, key)
    return _site.panel(cid).buttons[key].label


# ── CB4: Keyboard capture (clientside) ──────────────────────────────

app.clientside_callback(
    """
    function(n) {
        if (!window._playgroundKeys) {
            const held = new Set();
            window._playgroundKeys = held;
            document.addEventListener("keydown", function(e) {
                const k = e.key.toLowerCase();
                held.add(k);
                if (k.startsWith("arrow") || k === " ") { e.preventDefault(); }
            });
            document.addEventListener("keyup", function(e) {
                held.delete(e.key.toLowerCase());
            });
            window.addEventListener("blur", function() { held.clear(); });
        }
        return Array.from(window._playgroundKeys).sort();
    }
    """,
    Output("held-keys", "data"),
    Input("key-poll", "n_intervals"),
)


# ── CB5: Viewport size (clientside) ─────────────────────────────────

app.clientside_callback(
    """
    function(n, current) {
        const w = window.innerWidth;
        if (current && current.width === w) {
            return window.dash_clientside.no_update;
        }
        return {width: w};
    }
    """,
    Output("viewport", "data"),
    Input("viewport-poll", "n_intervals"),
    State("viewport", "data"),
)


# ── CB6: Viewport change -> resize every canvas ─────────────────────

@app.callback(
    Output("viewport-ack", "data"),
    Input("viewport", "data"),
    prevent_initial_call=True,
)
def viewport_change(viewport):
    global _last_width
    if not viewport:
        return no_update
    width = _canvas_width(float(viewport["width"]))
    if _last_width is not None and abs(width - _last_width) < 1.0:
        return no_update
    _last_width = width
    _site.resize(width)
    logger.info("canvases resized to width %.0f", width)
    return width


# ── CB7: Torque mass drag ────────────────────────────────────────────

_SHAPE_EDIT = re.compile(r"^shapes\[(\d+)\]\.([xy][01])$")


@app.callback(
    Output("drag-ack", "data"),
    Input({"type": "canvas", "canvas": TORQUE}, "relayoutData"),
    prevent_initial_call=True,
)
def torque_drag(relayout):
    if not relayout:
        return no_update
    edits: dict[int, dict[str, float]] = {}
    for k, v in relayout.items():
        m = _SHAPE_EDIT.match(k)
        if m:
            edits.setdefault(int(m.group(1)), {})[m.group(2)] = float(v)

    runner = _site.runner(TORQUE)
    ratio = runner.surface.pixel_ratio or 1.0
    moved = []
    for index, box in edits.items():
        if not {"x0", "x1", "y0", "y1"} <= box.keys():
            continue
        with runner.lock:
            name = runner.context.shape_name(index)
        if name is None:
            continue
        cx = (box["x0"] + box["x1"]) / 2 / ratio
        cy = (box["y0"] + box["y1"]) / 2 / ratio
        _site.drag(TORQUE, name, cx, cy)
        moved.append(name)
    return moved or no_update


# ── CB8: RC scope chart ──────────────────────────────────────────────

@app.callback(
    Output("rc-scope", "figure"),
    Input({"type": "ctl-readout", "canvas": RC_CIRCUIT, "key": ALL}, "children"),
)
def rc_scope(_readouts):
    rc = _site.demos[RC_CIRCUIT]
    with _site.runner(RC_CIRCUIT).lock:
        df = rc_curve_frame(rc)
        tau = rc.tau
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=df["t"], y=df["charging"], name="charging",
                             line=dict(color="#34d399")))
    fig.add_trace(go.Scatter(x=df["t"], y=df["discharging"], name="discharging",
                             line=dict(color="#f87171")))
    for n in range(1, 5):
        fig.add_vline(x=n * tau, line=dict(color="#5f6368", width=1, dash="dot"))
    fig.update_layout(
        **_LAYOUT_DEFAULTS,
        title=f"Capacitor voltage, τ = {tau:.2f} s",
        xaxis_title="t (s)",
        yaxis_title="Vc (V)",
    )
    return fig


# ═══════════════════════════════════════════════════════════════════════
#  Entry point
# ═══════════════════════════════════════════════════════════════════════

def main() -> None:
    app.run(host=_settings.host, debug=_settings.debug, port=_settings.port)


if __name__ == "__main__":
    main()
