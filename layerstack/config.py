"""Global configuration: constants, view options and option loading."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Distance (plane units) below which two coordinates count as the same
SNAP_PROXIMITY = 8.0

# Smallest width/height accepted for an interactively drawn component
MIN_COMPONENT_SIZE = 5.0

# Render height of the first layer added to an empty model
DEFAULT_LAYER_HEIGHT = 50

# Vertical space between stacked layers
DEFAULT_LAYER_GAP = 10.0

# Global transparency slider
DEFAULT_TRANSPARENCY = 0.4
MAX_TRANSPARENCY = 0.95

# Opacity of components hidden by an active search term
FILTERED_OPACITY = 0.2

# Fallback colour lightness / saturation (percent)
FALLBACK_LIGHTNESS = 70
FALLBACK_SATURATION = 100
FILTERED_SATURATION = 20

# Search terms shorter than this are ignored
MIN_SEARCH_TERM_LENGTH = 2

# Playback and redraw timers
DEFAULT_PLAYBACK_SPEED_MS = 500
DEFAULT_REDRAW_INTERVAL_MS = 40

# Diverging red -> white -> blue scale
DEFAULT_PALETTE: tuple[str, str, str] = ("#d7191c", "#f7f7f7", "#2c7bb6")

# Per-project config file, relative to the project root
CONFIG_DIR = ".layerstack"
CONFIG_FILE = "config.json"

# Environment variables and the option each one feeds
_ENV_KEYS: dict[str, str] = {
    "LAYERSTACK_LAYER_GAP": "layer_gap",
    "LAYERSTACK_TRANSPARENCY": "transparency",
    "LAYERSTACK_MIN_VALUE": "min_value",
    "LAYERSTACK_MAX_VALUE": "max_value",
    "LAYERSTACK_INVERSE": "inverse",
    "LAYERSTACK_AUTOPLAY": "autoplay",
    "LAYERSTACK_PLAYBACK_SPEED_MS": "playback_speed_ms",
    "LAYERSTACK_PROXIMITY": "proximity",
}


class ViewOptions(BaseModel):
    """Options supplied by the caller for guideline snapping and rendering."""

    layer_gap: float = Field(default=DEFAULT_LAYER_GAP, ge=0)
    transparency: float = DEFAULT_TRANSPARENCY
    min_value: float | None = None
    max_value: float | None = None
    inverse: bool = False
    palette: tuple[str, str, str] = DEFAULT_PALETTE
    autoplay: bool = False
    playback_speed_ms: float = Field(default=DEFAULT_PLAYBACK_SPEED_MS, gt=0)
    proximity: float = Field(default=SNAP_PROXIMITY, gt=0)

    @property
    def clamped_transparency(self) -> float:
        """Transparency limited to ``[0, MAX_TRANSPARENCY]``."""
        return min(max(self.transparency, 0.0), MAX_TRANSPARENCY)


def load_options(
    project_path: str | Path | None = None,
    **overrides: Any,
) -> ViewOptions:
    """Load merged options: defaults -> config.json -> env vars -> overrides.

    Parameters
    ----------
    project_path:
        Optional project root holding ``.layerstack/config.json``.
    overrides:
        Explicit option values; these win over every other source.
    """
    values: dict[str, Any] = {}

    if project_path is not None:
        config_json = Path(project_path) / CONFIG_DIR / CONFIG_FILE
        if config_json.is_file():
            try:
                data = json.loads(config_json.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    values.update(data)
            except (json.JSONDecodeError, OSError):
                logger.debug("Could not read %s", config_json, exc_info=True)

    for env_key, option in _ENV_KEYS.items():
        env_val = os.environ.get(env_key)
        if env_val is not None:
            values[option] = env_val

    values.update({k: v for k, v in overrides.items() if v is not None})
    return ViewOptions(**values)
