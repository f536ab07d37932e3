import torch

from . import render
from .errors import ConfigurationError
from .grid import Grid
from .log import get_logger
from .topology import HexagonalTopology, RectangularTopology, Topology, make_topology
from .trainer import DEFAULT_LEARNING_RATE, SomTrainer
from .vector import as_vector


__all__ = [
    "SOM",
    "RectSOM",
    "HexaSOM",
]


class SOM:
    """
    A Self-Organizing Map (Kohonen map).

    The map is a 2D array of N-dimensional vectors. Training pulls those
    vectors towards the sample vectors, so that clusters in the samples
    become neighbourhoods on the map.

    Example:
        >>> som = SOM(output_dim="5x6", input_dim=3)
        >>> som.initialize()
        >>> som.train(30, [3, 2, 4], [-1, -1, -1], [0, 4, -3])
    """
    def __init__(self,
                 output_dim,
                 input_dim: int,
                 learning_rate: float = DEFAULT_LEARNING_RATE,
                 sigma0: float | None = None,
                 random_seed: int | None = None
                ):
        """
        Initializes the Self-Organizing Map. The vectors themselves are
        only created by `initialize`.

        Args:
            output_dim: A "WxH" string for a rectangular map, a positive
                        integer for a hexagonal one, or a `Topology`.
            input_dim (int): Dimensionality of the sample vectors.
            learning_rate (float): Learning rate at the start of each
                                   training run.
            sigma0 (float | None): Neighbourhood radius at the start of each
                                   training run. Defaults to `radius()`.
            random_seed (int | None): Seed for initialization and sampling.
        """
        self.topology = self._make_topology(output_dim)
        self.grid = Grid(self.topology, input_dim)

        self.generator = torch.Generator()
        if random_seed is not None:
            self.generator.manual_seed(random_seed)
        else:
            self.generator.seed()

        self.trainer = SomTrainer(self.grid, learning_rate=learning_rate, sigma0=sigma0,
                                  generator=self.generator)
        self.logger = get_logger(self)

    def _make_topology(self, output_dim) -> Topology:
        return make_topology(output_dim)

    @property
    def input_dim(self) -> int:
        return self.grid.input_dim

    @property
    def shape(self) -> tuple[int, int]:
        return self.grid.shape

    @property
    def learning_rate(self) -> float:
        return self.trainer.learning_rate

    @property
    def sigma0(self) -> float:
        return self.trainer.sigma0

    def initialize(self, *seeds):
        """
        Initializes all vectors in the map. Needed before training.

        With seed vectors, these are used in turn to seed the neurons,
        starting over when there are fewer seeds than neurons. That way it
        is trivial to zero everything:

            >>> som.initialize([0, 0, 0])

        Without seeds, every component gets a random value in [-0.5, 0.5).
        """
        self.grid.initialize(list(seeds) if seeds else None, generator=self.generator)
        self.logger.debug("Initialized %s from %s", self.grid, f"{len(seeds)} seeds" if seeds else "random values")

    def train(self, epochs: int, *samples, should_stop=None) -> int:
        """
        Trains the map. Each epoch processes one randomly picked sample.

        Args:
            epochs (int): Number of samples to process.
            *samples: The sample vectors, each of length `input_dim`.
            should_stop: Optional callable checked after every epoch.

        Returns:
            int: The number of epochs run.
        """
        return self.trainer.train(epochs, samples, should_stop=should_stop)

    def bmu(self, sample) -> tuple[int, int, float]:
        """
        Finds the best matching unit, i.e. the neuron closest to `sample`.

        Returns:
            tuple[int, int, float]: Its coordinates and the distance.
        """
        return self.trainer.bmu(sample)

    def neighbors(self, sigma: float, x: int, y: int) -> list[tuple[int, int, float]]:
        """Finds all neighbours of (x, y) within `sigma` as (x, y, distance) triples."""
        return self.trainer.neighbors(sigma, x, y)

    def value(self, x: int, y: int, v=None) -> torch.Tensor:
        """
        Gets or sets the vector of the neuron at (x, y).

        Returns:
            torch.Tensor: A copy of the (new) vector.
        """
        if v is not None:
            self.grid.set(x, y, v)
        return self.grid.get(x, y)

    def map(self) -> torch.Tensor:
        """Returns the live (X, Y, Z) weight tensor."""
        return self.grid.weights

    def get_weights(self) -> torch.Tensor:
        """Returns a copy of the current weights."""
        return self.grid.snapshot()

    def radius(self) -> float:
        """Returns the radius of the map. Different topologies interpret this differently."""
        return self.topology.radius

    def output_dim(self):
        """Returns the output dimension as passed in at construction time."""
        return self.topology.output_dim

    def map_to_bmu_locations(self, samples) -> list[tuple[int, int]]:
        """Maps every sample to the coordinates of its best matching unit."""
        return [self.bmu(s)[:2] for s in samples]

    def quantization_error(self, samples) -> float:
        """
        Average distance between each sample and its best matching unit.

        Args:
            samples: A non-empty sequence of vectors.

        Returns:
            float: The quantization error.
        """
        errors = self._bmu_distances(samples)
        return errors.mean().item()

    def mse(self, samples) -> float:
        """Mean squared distance between each sample and its best matching unit."""
        errors = self._bmu_distances(samples)
        return (errors ** 2).mean().item()

    def _bmu_distances(self, samples) -> torch.Tensor:
        vectors = [as_vector(s, dtype=self.grid.dtype) for s in samples]
        if not vectors:
            raise ConfigurationError("Need at least one sample vector.")
        return torch.tensor([self.bmu(v)[2] for v in vectors], dtype=self.grid.dtype)

    def as_string(self) -> str:
        """Pretty-prints the current vectors, one component plane per row block."""
        return render.as_string(self.grid)

    def as_data(self) -> str:
        """Raw vector data, one neuron per line. Can be fed into gnuplot."""
        return render.as_data(self.grid)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(output_dim={self.output_dim()!r}, input_dim={self.input_dim})"

    def __repr__(self) -> str:
        return self.__str__()


class RectSOM(SOM):
    """A SOM on a rectangular grid; `output_dim` is a "WxH" string."""

    def _make_topology(self, output_dim) -> Topology:
        return RectangularTopology(output_dim)


class HexaSOM(SOM):
    """A SOM on a hexagonal grid; `output_dim` is its diameter."""

    def _make_topology(self, output_dim) -> Topology:
        return HexagonalTopology(output_dim)

    def diameter(self) -> int:
        return self.topology.diameter
