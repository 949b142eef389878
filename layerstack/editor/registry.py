"""LayerEditorRegistry — open layer editors keyed by layer index."""

from __future__ import annotations

import logging
from typing import Iterator, Protocol

logger = logging.getLogger(__name__)


class LayerEditorHandle(Protocol):
    """What the model editor needs from an open layer editor."""

    def update_component_list(self, component_ids: list[str]) -> None: ...

    def redraw(self) -> None: ...


class LayerEditorRegistry:
    """Map layer indices to open editor handles.

    Indices go stale whenever layers are inserted, removed or reordered;
    the owner then calls :meth:`clear` (or :meth:`refresh` for the affected
    indices) instead of patching individual entries.
    """

    def __init__(self) -> None:
        self._handles: dict[int, LayerEditorHandle] = {}

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, layer_index: object) -> bool:
        return layer_index in self._handles

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._handles))

    def register(self, layer_index: int, handle: LayerEditorHandle) -> None:
        self._handles[layer_index] = handle

    def unregister(self, layer_index: int) -> None:
        self._handles.pop(layer_index, None)

    def get(self, layer_index: int) -> LayerEditorHandle | None:
        return self._handles.get(layer_index)

    def clear(self) -> None:
        if self._handles:
            logger.debug("Invalidating %d layer editor handles", len(self._handles))
        self._handles = {}

    def refresh(self, layer_index: int, component_ids: list[str]) -> bool:
        """Push *component_ids* to the handle at *layer_index* and redraw it."""
        handle = self._handles.get(layer_index)
        if handle is None:
            return False
        handle.update_component_list(component_ids)
        handle.redraw()
        return True
