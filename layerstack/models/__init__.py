"""Model shapes: layers, components and scalar data feeds."""

from layerstack.models.data import DataSource, ScalarFrame, TimeSeries, parse_data_source
from layerstack.models.model import Component, Layer, Model

__all__ = [
    "Component",
    "DataSource",
    "Layer",
    "Model",
    "ScalarFrame",
    "TimeSeries",
    "parse_data_source",
]
