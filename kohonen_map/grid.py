import numbers

import torch

from .errors import ConfigurationError, DimensionMismatch, GridIndexError, NotInitializedError
from .topology import Topology
from .vector import DEFAULT_DTYPE, as_vector


__all__ = [
    "INIT_LOW",
    "INIT_HIGH",
    "Grid",
]


INIT_LOW, INIT_HIGH = -0.5, 0.5


class Grid:
    """
    The 2D array of prototype vectors of a Self-Organizing Map.

    Weights are held in a single tensor of shape (X, Y, Z). The grid is
    never resized; only `initialize`, `set` and the trainer write to it.
    """
    def __init__(self, topology: Topology, input_dim: int, dtype: torch.dtype = DEFAULT_DTYPE):
        if isinstance(input_dim, bool) or not isinstance(input_dim, numbers.Integral) or input_dim <= 0:
            raise ConfigurationError(f"Input dimension must be a positive integer. Got {input_dim!r}")
        self.topology = topology
        self.input_dim = int(input_dim)
        self.dtype = dtype
        self._weights = None

    @property
    def shape(self) -> tuple[int, int]:
        return self.topology.shape

    @property
    def initialized(self) -> bool:
        return self._weights is not None

    @property
    def weights(self) -> torch.Tensor:
        """The live (X, Y, Z) weight tensor."""
        if self._weights is None:
            raise NotInitializedError("Grid has not been initialized. Call initialize() first.")
        return self._weights

    def initialize(self, seeds=None, generator: torch.Generator | None = None):
        """
        Fills every cell, overwriting previous contents.

        Args:
            seeds: Optional sequence of vectors. Cells are assigned
                   `seeds[i % len(seeds)]` in enumeration order.
                   Without seeds, components are drawn uniformly from
                   [-0.5, 0.5).
            generator (torch.Generator | None): Source of randomness.
        """
        rows, cols = self.shape
        if seeds is None:
            weights = torch.rand(rows, cols, self.input_dim, generator=generator, dtype=self.dtype)
            weights = weights * (INIT_HIGH - INIT_LOW) + INIT_LOW
        else:
            vectors = [self._check(as_vector(s, dtype=self.dtype)) for s in seeds]
            if not vectors:
                raise ConfigurationError("Seed list must not be empty.")
            order = [vectors[i % len(vectors)] for i in range(self.topology.num_cells)]
            weights = torch.stack(order).reshape(rows, cols, self.input_dim)
        self._weights = weights

    def get(self, x: int, y: int) -> torch.Tensor:
        """Returns a copy of the vector at (x, y)."""
        self.check_bounds(x, y)
        return self.weights[x, y].clone()

    def set(self, x: int, y: int, v):
        self.check_bounds(x, y)
        self.weights[x, y] = self._check(as_vector(v, dtype=self.dtype))

    def flat(self) -> torch.Tensor:
        """An (X*Y, Z) view of the weights in enumeration order."""
        return self.weights.view(-1, self.input_dim)

    def snapshot(self) -> torch.Tensor:
        return self.weights.clone().detach()

    def _check(self, v: torch.Tensor) -> torch.Tensor:
        if v.shape[0] != self.input_dim:
            raise DimensionMismatch(
                f"Vector must have {self.input_dim} components. Got {v.shape[0]}"
            )
        return v

    def check_bounds(self, x: int, y: int):
        if not self.topology.contains(x, y):
            raise GridIndexError(f"Coordinate ({x}, {y}) outside grid of shape {self.shape}")

    def __repr__(self) -> str:
        return f"Grid(topology={self.topology!r}, input_dim={self.input_dim})"
