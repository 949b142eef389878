"""Model — the layered spatial model edited by the user.

A model is an ordered stack of layers.  Each layer holds rectangular
components on a 2D plane and a render height used when the stack is
extruded into 3D.  The JSON form is the plain dump of these fields, so an
export/import round trip preserves the shape verbatim.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class Component(BaseModel):
    """A uniquely identified rectangle inside a layer.

    ``(x, y)`` is the top-left corner; ``size`` is ``(width, depth)``.
    """

    id: str
    x: float
    y: float
    size: tuple[float, float]

    @field_validator("size")
    @classmethod
    def _positive_size(cls, value: tuple[float, float]) -> tuple[float, float]:
        if value[0] <= 0 or value[1] <= 0:
            raise ValueError(f"component size must be positive, got {value}")
        return value

    @property
    def width(self) -> float:
        return self.size[0]

    @property
    def depth(self) -> float:
        return self.size[1]

    @property
    def right(self) -> float:
        return self.x + self.size[0]

    @property
    def bottom(self) -> float:
        return self.y + self.size[1]


class Layer(BaseModel):
    """A horizontal slice of the model."""

    components: list[Component] = Field(default_factory=list)
    height: float = Field(gt=0)
    label: str | None = ""

    def component_ids(self) -> list[str]:
        return [c.id for c in self.components]

    def find(self, component_id: str) -> Component | None:
        for component in self.components:
            if component.id == component_id:
                return component
        return None


class Model(BaseModel):
    """Root entity: the ordered layer stack."""

    layers: list[Layer] = Field(default_factory=list)

    def component_count(self) -> int:
        return sum(len(layer.components) for layer in self.layers)

    def is_empty(self) -> bool:
        return self.component_count() == 0

    def snapshot(self) -> Model:
        """Deep copy handed to the render pipeline for one recompute."""
        return self.model_copy(deep=True)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, text: str) -> Model:
        return cls.model_validate_json(text)
