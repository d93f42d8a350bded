"""Request routing, file IO and end-to-end conversion."""

from .catalog_io import CatalogIO
from .converter import Converter
from .path_router import ConversionRequest, OutputLayout, OutputTarget, PathRouter, RoutePlan

__all__ = [
    "CatalogIO",
    "Converter",
    "ConversionRequest",
    "OutputLayout",
    "OutputTarget",
    "PathRouter",
    "RoutePlan",
]
