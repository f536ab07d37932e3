"""
kohonen_map - Self-Organizing Maps (Kohonen maps) on rectangular and hexagonal grids, built on PyTorch.
"""
from .errors import (
    SOMError,
    ConfigurationError,
    FormatError,
    DimensionMismatch,
    GridIndexError,
    NotInitializedError,
)
from .grid import Grid
from .som import SOM, RectSOM, HexaSOM
from .topology import Topology, RectangularTopology, HexagonalTopology, make_topology
from .trainer import SomTrainer
from .vector import distance

__version__ = "0.1.0"

__all__ = [
    "SOM",
    "RectSOM",
    "HexaSOM",
    "Grid",
    "SomTrainer",
    "Topology",
    "RectangularTopology",
    "HexagonalTopology",
    "make_topology",
    "distance",
    "SOMError",
    "ConfigurationError",
    "FormatError",
    "DimensionMismatch",
    "GridIndexError",
    "NotInitializedError",
]
