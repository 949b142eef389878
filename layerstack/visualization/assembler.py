"""Scene assembler — layout + colours + filters into drawables."""

from __future__ import annotations

import logging
from typing import Collection

from layerstack.config import (
    DEFAULT_TRANSPARENCY,
    FALLBACK_LIGHTNESS,
    FALLBACK_SATURATION,
    FILTERED_OPACITY,
    FILTERED_SATURATION,
    MAX_TRANSPARENCY,
    MIN_SEARCH_TERM_LENGTH,
)
from layerstack.models.model import Model
from layerstack.visualization.colors import ColorMapper, clamp, hsl_color
from layerstack.visualization.layout import Layout
from layerstack.visualization.playback import PlaybackState
from layerstack.visualization.scene import Drawable

logger = logging.getLogger(__name__)


def effective_search_term(search_term: str | None) -> str:
    """Lower-cased search term, or ``""`` when too short to filter."""
    if not search_term or len(search_term) < MIN_SEARCH_TERM_LENGTH:
        return ""
    return search_term.lower()


def assemble_scene(
    model: Model,
    layout: Layout | None,
    mapper: ColorMapper | None = None,
    state: PlaybackState | None = None,
    visible_layers: Collection[int] | None = None,
    search_term: str | None = None,
    transparency: float = DEFAULT_TRANSPARENCY,
) -> list[Drawable]:
    """Build the flat drawable list for one recompute.

    Parameters
    ----------
    model:
        The model snapshot the layout was computed from.
    layout:
        Output of :func:`compute_layout`; ``None`` yields no drawables.
    mapper:
        Data colour resolver; ``None`` means every box uses its layer hue.
    state:
        Active playback state for time series data.
    visible_layers:
        Indices of layers to draw; ``None`` draws all of them.  Hidden
        layers still occupy their place in the stack.
    search_term:
        Case-insensitive id filter, ignored below two characters.
    transparency:
        Global transparency slider, clamped to ``[0, 0.95]``.
    """
    if layout is None:
        return []

    term = effective_search_term(search_term)
    base_opacity = 1 - clamp(transparency, 0.0, MAX_TRANSPARENCY)

    drawables: list[Drawable] = []
    for layer_index, layer in enumerate(model.layers):
        if visible_layers is not None and layer_index not in visible_layers:
            continue
        hue = layout.layer_hues[layer_index]
        for component in layer.components:
            placement = layout.placement(layer_index, component.id)
            if placement is None:
                logger.debug("No placement for %s in layer %d", component.id, layer_index)
                continue

            data_color = mapper.resolve(component.id, state) if mapper is not None else None
            matches = bool(term) and term in component.id.lower()
            filtered_out = bool(term) and not matches

            saturation = FILTERED_SATURATION if filtered_out else FALLBACK_SATURATION
            color = data_color or hsl_color(hue, saturation, FALLBACK_LIGHTNESS)
            wireframe = not (data_color is not None or matches)
            opacity = FILTERED_OPACITY if filtered_out else base_opacity

            drawables.append(Drawable(
                layer_index=layer_index,
                component_id=component.id,
                position=placement.position,
                footprint=placement.footprint,
                color=color,
                wireframe=wireframe,
                opacity=opacity,
            ))

    return drawables
