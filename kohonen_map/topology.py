"""
Grid topologies.

A topology knows the shape of the map, the order in which its cells are
enumerated and the planar distance between two cells. Grids and trainers
receive one as a strategy object.
"""
import math
import numbers
import re
from abc import ABC, abstractmethod

import torch

from .errors import ConfigurationError, FormatError


__all__ = [
    "Topology",
    "RectangularTopology",
    "HexagonalTopology",
    "parse_output_dim",
    "make_topology",
]


_DIM_PATTERN = re.compile(r"^\s*(\d+)x(\d+)\s*$")


def parse_output_dim(output_dim: str) -> tuple[int, int]:
    """
    Parses a rectangular output dimension of the form "WxH".

    Raises:
        FormatError: if `output_dim` is not two positive integers joined by 'x'.
    """
    if not isinstance(output_dim, str):
        raise FormatError(f"Output dimension must be a 'WxH' string. Got {output_dim!r}")
    match = _DIM_PATTERN.match(output_dim)
    if match is None:
        raise FormatError(f"Output dimension must be of the form 'WxH'. Got {output_dim!r}")
    x, y = int(match.group(1)), int(match.group(2))
    if x <= 0 or y <= 0:
        raise FormatError(f"Output dimensions must be positive. Got {output_dim!r}")
    return x, y


def _positive_int(value, what: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{what} must be a positive integer. Got {value!r}")
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if not isinstance(value, numbers.Integral) or value <= 0:
        raise ConfigurationError(f"{what} must be a positive integer. Got {value!r}")
    return int(value)


class Topology(ABC):
    """
    Base class of grid topologies.

    Cells are enumerated row-major: x in the outer loop, y in the inner one.
    The same order drives seeded initialization and BMU tie-breaking.
    """

    def __init__(self, output_dim, shape: tuple[int, int]):
        self._output_dim = output_dim
        self.shape = shape

    @property
    def output_dim(self):
        """The output dimension as passed in at construction time."""
        return self._output_dim

    @property
    def num_cells(self) -> int:
        return self.shape[0] * self.shape[1]

    @property
    @abstractmethod
    def radius(self) -> float:
        ...

    @abstractmethod
    def planar_distance(self, a: tuple[int, int], b: tuple[int, int]) -> float:
        ...

    @abstractmethod
    def distance_map(self, x: int, y: int) -> torch.Tensor:
        """Planar distance from (x, y) to every cell, as an (X, Y) tensor."""

    def coordinates(self) -> list[tuple[int, int]]:
        rows, cols = self.shape
        return [(x, y) for x in range(rows) for y in range(cols)]

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.shape[0] and 0 <= y < self.shape[1]

    def _offsets(self, x: int, y: int) -> tuple[torch.Tensor, torch.Tensor]:
        rows, cols = self.shape
        grid_x, grid_y = torch.meshgrid(
            torch.arange(rows, dtype=torch.float64),
            torch.arange(cols, dtype=torch.float64),
            indexing='ij'
        )
        return grid_x - x, grid_y - y

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(output_dim={self.output_dim!r})"


class RectangularTopology(Topology):
    """
    A rectangular X x Y grid with straight Euclidean distance between
    integer coordinates.
    """

    def __init__(self, output_dim: str):
        super().__init__(output_dim, parse_output_dim(output_dim))

    @property
    def radius(self) -> float:
        return max(self.shape) / 2

    def planar_distance(self, a, b) -> float:
        return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)

    def distance_map(self, x, y) -> torch.Tensor:
        dx, dy = self._offsets(x, y)
        return torch.sqrt(dx ** 2 + dy ** 2)


class HexagonalTopology(Topology):
    """
    A D x D rhombus of hexagons addressed with axial coordinates.

    The distance is the number of steps along the hex lattice, so every
    interior cell has six neighbours at distance 1:
    (+-1, 0), (0, +-1), (+1, -1) and (-1, +1).
    """

    def __init__(self, output_dim: int):
        diameter = _positive_int(output_dim, "Hexagonal output dimension")
        super().__init__(output_dim, (diameter, diameter))

    @property
    def diameter(self) -> int:
        return self.shape[0]

    @property
    def radius(self) -> float:
        return self.diameter / 2

    def planar_distance(self, a, b) -> float:
        dx, dy = b[0] - a[0], b[1] - a[1]
        if dx * dy < 0:
            return float(max(abs(dx), abs(dy)))
        return float(abs(dx) + abs(dy))

    def distance_map(self, x, y) -> torch.Tensor:
        dx, dy = self._offsets(x, y)
        return torch.where(
            dx * dy < 0,
            torch.maximum(dx.abs(), dy.abs()),
            dx.abs() + dy.abs()
        )


def make_topology(output_dim) -> Topology:
    """
    Picks a topology from the form of `output_dim`: a positive integer (or a
    string of digits) gives a hexagonal grid, any other string a rectangular
    one parsed as "WxH".
    """
    if isinstance(output_dim, Topology):
        return output_dim
    if isinstance(output_dim, str) and not output_dim.strip().isdigit():
        return RectangularTopology(output_dim)
    return HexagonalTopology(output_dim)
