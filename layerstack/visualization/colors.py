"""Colour mapping — scalar values to a 3-stop gradient, layer hue fallback.

The value range is resolved once per data source assignment; per-frame
lookups only index into the already parsed data.
"""

from __future__ import annotations

import colorsys
import logging
from dataclasses import dataclass
from typing import Sequence

from layerstack.config import DEFAULT_PALETTE
from layerstack.models.data import DataSource, ScalarFrame, TimeSeries
from layerstack.visualization.playback import PlaybackState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValueRange:
    min: float
    max: float

    def percent(self, value: float) -> float:
        """Position of *value* inside the range, clamped to ``[0, 1]``."""
        span = self.max - self.min
        if span == 0:
            return 0.0
        return clamp((value - self.min) / span, 0.0, 1.0)


class Palette:
    """Ordered colour stops for piecewise-linear interpolation.

    Parameters
    ----------
    colors:
        Hex colours; stops are spread evenly over ``[0, 1]``.  Three stops
        give the ``0 / 0.5 / 1`` table.
    """

    def __init__(self, colors: Sequence[str] = DEFAULT_PALETTE) -> None:
        if len(colors) < 2:
            raise ValueError("A palette needs at least two colour stops")
        last = len(colors) - 1
        self.stops: list[tuple[float, tuple[int, int, int]]] = [
            (i / last, hex_to_rgb(c)) for i, c in enumerate(colors)
        ]

    @property
    def first(self) -> str:
        return rgb_to_hex(self.stops[0][1])

    @property
    def last(self) -> str:
        return rgb_to_hex(self.stops[-1][1])

    def interpolate(self, percent: float) -> str:
        """Colour at *percent* between the two bracketing stops."""
        t = clamp(percent, 0.0, 1.0)
        for idx in range(len(self.stops) - 1):
            t0, c0 = self.stops[idx]
            t1, c1 = self.stops[idx + 1]
            if t <= t1:
                segment = 0.0 if t1 == t0 else (t - t0) / (t1 - t0)
                return rgb_to_hex(_lerp_color(c0, c1, segment))
        return rgb_to_hex(self.stops[-1][1])


def get_min_max_value(
    data: DataSource | None,
    min_value: float | None = None,
    max_value: float | None = None,
) -> ValueRange:
    """Resolve the normalization range for *data*.

    Explicit bounds are used as-is, each independently.  A missing bound is
    taken from a scan over all values of all components (time series are
    flattened); an empty scan yields ``0.0``.
    """
    if min_value is not None and max_value is not None:
        return ValueRange(min=min_value, max=max_value)

    values = list(data.all_values()) if data is not None else []
    scanned_min = min(values) if values else 0.0
    scanned_max = max(values) if values else 0.0
    return ValueRange(
        min=min_value if min_value is not None else scanned_min,
        max=max_value if max_value is not None else scanned_max,
    )


class ColorMapper:
    """Resolve per-component data colours for the active frame.

    Parameters
    ----------
    data:
        Parsed data source, or ``None`` when no data is attached.
    min_value, max_value:
        Optional explicit normalization bounds.
    inverse:
        Swap the palette direction.
    palette:
        Colour stops; defaults to the diverging red/white/blue scale.
    """

    def __init__(
        self,
        data: DataSource | None = None,
        min_value: float | None = None,
        max_value: float | None = None,
        inverse: bool = False,
        palette: Palette | Sequence[str] | None = None,
    ) -> None:
        self.data = data
        self.inverse = inverse
        if palette is None:
            palette = Palette()
        elif not isinstance(palette, Palette):
            palette = Palette(palette)
        self.palette = palette
        self.range = get_min_max_value(data, min_value, max_value)

    def value_for(self, component_id: str, state: PlaybackState | None = None) -> float | None:
        """Raw data value of *component_id* for the active frame."""
        if self.data is None:
            return None
        if isinstance(self.data, ScalarFrame):
            return self.data.values.get(component_id)
        if isinstance(self.data, TimeSeries):
            if state is None or state.current_frame is None:
                return None
            series = self.data.values.get(component_id)
            frame = state.current_frame
            if series is None or frame < 0 or frame >= len(series):
                return None
            return series[frame]
        return None

    def color_for_value(self, value: float) -> str:
        percent = self.range.percent(value)
        if self.inverse:
            percent = 1 - percent
        return self.palette.interpolate(percent)

    def resolve(self, component_id: str, state: PlaybackState | None = None) -> str | None:
        """Data colour for *component_id*, or ``None`` for the hue fallback."""
        value = self.value_for(component_id, state)
        if value is None:
            return None
        return self.color_for_value(value)


def resolve_color(
    component_id: str,
    data: DataSource | None,
    state: PlaybackState | None,
    value_range: ValueRange,
    inverse: bool = False,
    palette: Palette | None = None,
) -> str | None:
    """Functional form of :meth:`ColorMapper.resolve` with an explicit range."""
    mapper = ColorMapper(
        data,
        min_value=value_range.min,
        max_value=value_range.max,
        inverse=inverse,
        palette=palette,
    )
    return mapper.resolve(component_id, state)


# ---------------------------------------------------------------------------
# Colour conversions
# ---------------------------------------------------------------------------


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def hsl_color(hue: float, saturation: float, lightness: float) -> str:
    """CSS ``hsl()`` string; saturation and lightness are percentages."""
    return f"hsl({hue:g}, {saturation:g}%, {lightness:g}%)"


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """Hex colour for a hue in degrees (any value, taken modulo 360)."""
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360, lightness / 100, saturation / 100)
    return rgb_to_hex((round(r * 255), round(g * 255), round(b * 255)))


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert ``#rrggbb`` to an ``(r, g, b)`` tuple of ints."""
    cleaned = hex_color.lstrip("#")
    if len(cleaned) != 6:
        raise ValueError(f"Not a #rrggbb colour: {hex_color!r}")
    return (int(cleaned[0:2], 16), int(cleaned[2:4], 16), int(cleaned[4:6], 16))


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def parse_css_color(color: str) -> str:
    """Normalize a ``#rrggbb`` or ``hsl(h, s%, l%)`` string to hex."""
    color = color.strip()
    if color.startswith("#"):
        return rgb_to_hex(hex_to_rgb(color))
    if color.startswith("hsl(") and color.endswith(")"):
        parts = [p.strip().rstrip("%") for p in color[4:-1].split(",")]
        if len(parts) == 3:
            return hsl_to_hex(float(parts[0]), float(parts[1]), float(parts[2]))
    raise ValueError(f"Unsupported colour: {color!r}")


def _lerp_color(
    start: tuple[int, int, int], end: tuple[int, int, int], t: float
) -> tuple[int, int, int]:
    blend = clamp(t, 0.0, 1.0)
    return (
        round(start[0] + (end[0] - start[0]) * blend),
        round(start[1] + (end[1] - start[1]) * blend),
        round(start[2] + (end[2] - start[2]) * blend),
    )
