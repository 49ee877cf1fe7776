"""
Runtime settings.

All knobs come from environment variables so the same code runs locally
(``python app.py``) and on a hosted container that sets ``PORT``.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 7860
    debug: bool = False
    frame_ms: int = 33
    seed: int = 1337
    pixel_ratio: float = 1.0
    wave_step: int = 4
    log_level: int = logging.INFO
    canvas_width: float = 800.0
    canvas_height: float = 480.0

    @classmethod
    def from_env(cls) -> Settings:
        level_name = os.environ.get("PLAYGROUND_LOG_LEVEL", "INFO").upper()
        return cls(
            host=os.environ.get("PLAYGROUND_HOST", cls.host),
            port=int(os.environ.get("PORT", cls.port)),
            debug=_env_bool("PLAYGROUND_DEBUG", cls.debug),
            frame_ms=int(os.environ.get("PLAYGROUND_FRAME_MS", cls.frame_ms)),
            seed=int(os.environ.get("PLAYGROUND_SEED", cls.seed)),
            pixel_ratio=float(os.environ.get("PLAYGROUND_PIXEL_RATIO", cls.pixel_ratio)),
            wave_step=int(os.environ.get("PLAYGROUND_WAVE_STEP", cls.wave_step)),
            log_level=getattr(logging, level_name, logging.INFO),
        )
