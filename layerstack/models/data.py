"""Scalar data feeds used to colour components.

Two shapes are accepted from callers:

* a mapping ``{component_id: value}`` (a single frame), or
* ``{"timestamps": [...], "values": {component_id: [...]}}`` (a time series
  whose value lists align 1:1 with the timestamps).

The raw shape is resolved once into :class:`ScalarFrame` or
:class:`TimeSeries` by :func:`parse_data_source`.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Union

from pydantic import BaseModel, Field, model_validator


class ScalarFrame(BaseModel):
    """One value per component."""

    values: dict[str, float] = Field(default_factory=dict)

    def all_values(self) -> Iterator[float]:
        yield from self.values.values()


class TimeSeries(BaseModel):
    """Per-component value sequences aligned with ``timestamps``."""

    timestamps: list[float] = Field(default_factory=list)
    values: dict[str, list[float]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _aligned(self) -> TimeSeries:
        for component_id, series in self.values.items():
            if len(series) != len(self.timestamps):
                raise ValueError(
                    f"series for {component_id!r} has {len(series)} values, "
                    f"expected {len(self.timestamps)}"
                )
        return self

    @property
    def frame_count(self) -> int:
        return len(self.timestamps)

    def all_values(self) -> Iterator[float]:
        for series in self.values.values():
            yield from series


DataSource = Union[ScalarFrame, TimeSeries]


def parse_data_source(raw: Mapping[str, Any] | DataSource | None) -> DataSource | None:
    """Resolve a raw data mapping into its tagged variant.

    A mapping holding a ``timestamps`` key is a time series; any other
    mapping is a single frame.
    """
    if raw is None:
        return None
    if isinstance(raw, (ScalarFrame, TimeSeries)):
        return raw
    if "timestamps" in raw:
        return TimeSeries(
            timestamps=list(raw.get("timestamps") or []),
            values=dict(raw.get("values") or {}),
        )
    return ScalarFrame(values=dict(raw))
