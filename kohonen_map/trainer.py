import math
import numbers
from typing import Callable

import torch

from .errors import ConfigurationError, DimensionMismatch
from .grid import Grid
from .log import get_logger
from .vector import as_vector, distances


__all__ = [
    "DEFAULT_LEARNING_RATE",
    "decay_constant",
    "radius_at",
    "learning_rate_at",
    "SomTrainer",
]


DEFAULT_LEARNING_RATE = 0.1

logger = get_logger(__name__)


def decay_constant(sigma0: float, epochs: int) -> float:
    """
    Time constant of the radius decay, `epochs / ln(sigma0)`.

    Chosen so that the radius shrinks from `sigma0` to 1 over `epochs`.
    """
    if sigma0 <= 1:
        raise ConfigurationError(f"Initial radius sigma0 must be greater than 1. Got {sigma0}")
    return epochs / math.log(sigma0)


def radius_at(t: int, sigma0: float, lambda_: float) -> float:
    return sigma0 * math.exp(-t / lambda_)


def learning_rate_at(t: int, learning_rate: float, epochs: int) -> float:
    return learning_rate * math.exp(-t / epochs)


class SomTrainer:
    """
    Online (one sample per epoch) training of a `Grid`.

    Each epoch draws one sample at random, finds its best matching unit,
    and pulls every unit within the current radius towards the sample with
    a Gaussian weight. Radius and learning rate decay exponentially over
    the epochs of a single `train` call; nothing but the grid carries over
    between calls.

    At most one `train` call may run against a grid at a time.
    """
    def __init__(self,
                 grid: Grid,
                 learning_rate: float = DEFAULT_LEARNING_RATE,
                 sigma0: float | None = None,
                 generator: torch.Generator | None = None
                ):
        """
        Args:
            grid (Grid): The grid to train.
            learning_rate (float): Learning rate at the start of training.
            sigma0 (float | None): Neighbourhood radius at the start of
                                   training. Defaults to the topology radius.
            generator (torch.Generator | None): Source of randomness for
                                                sample selection.
        """
        if learning_rate <= 0:
            raise ConfigurationError(f"Learning rate must be positive. Got {learning_rate}")
        if sigma0 is not None and sigma0 <= 1:
            raise ConfigurationError(f"Initial radius sigma0 must be greater than 1. Got {sigma0}")
        self.grid = grid
        self.learning_rate = float(learning_rate)
        self.sigma0 = float(sigma0) if sigma0 is not None else float(grid.topology.radius)
        self.generator = generator

    def bmu(self, sample) -> tuple[int, int, float]:
        """
        Finds the best matching unit for `sample`.

        Ties go to the first unit in enumeration order (x outer, y inner).

        Returns:
            tuple[int, int, float]: (x, y, distance)
        """
        dists = distances(sample, self.grid.flat())
        index = int(torch.argmin(dists).item())
        x, y = divmod(index, self.grid.shape[1])
        return x, y, dists[index].item()

    def neighbors(self, sigma: float, x: int, y: int) -> list[tuple[int, int, float]]:
        """
        All units within planar distance `sigma` of (x, y), inclusive.
        The unit itself is always part of the result at distance 0.

        Returns:
            list[tuple[int, int, float]]: (x, y, distance) triples in
                                          enumeration order.
        """
        self.grid.check_bounds(x, y)
        dmap = self.grid.topology.distance_map(x, y)
        within = torch.nonzero(dmap <= sigma).tolist()
        return [(nx, ny, dmap[nx, ny].item()) for nx, ny in within]

    def train(self, epochs: int, samples, should_stop: Callable[[int], bool] | None = None):
        """
        Trains the grid for `epochs` single-sample steps.

        Args:
            epochs (int): Number of steps. Zero leaves the grid untouched.
            samples: Non-empty sequence of vectors of the grid's input dimension.
            should_stop (Callable[[int], bool] | None): Consulted after
                each completed epoch with its index; returning True ends
                training early.

        Returns:
            int: The number of epochs that were run.
        """
        if isinstance(epochs, bool) or not isinstance(epochs, numbers.Integral) or epochs < 0:
            raise ConfigurationError(f"Epochs must be a non-negative integer. Got {epochs!r}")
        epochs = int(epochs)
        data = self._prepare(samples)
        weights = self.grid.weights
        lambda_ = decay_constant(self.sigma0, epochs)
        if epochs == 0:
            return 0

        logger.info(
            "Training %s for %d epochs on %d samples (learning_rate=%s, sigma0=%s)",
            self.grid, epochs, data.shape[0], self.learning_rate, self.sigma0
        )

        for t in range(1, epochs + 1):
            sigma = radius_at(t, self.sigma0, lambda_)
            rate = learning_rate_at(t, self.learning_rate, epochs)

            index = int(torch.randint(data.shape[0], (1,), generator=self.generator).item())
            sample = data[index]

            x, y, d = self.bmu(sample)
            for nx, ny, nd in self.neighbors(sigma, x, y):
                self._adjust(weights[nx, ny], sample, nd, sigma, rate)
            logger.debug("epoch %d: sigma=%.4f, rate=%.4f, bmu=(%d, %d), distance=%.4f", t, sigma, rate, x, y, d)

            if should_stop is not None and should_stop(t):
                logger.info("Training stopped after %d of %d epochs", t, epochs)
                return t

        logger.info("Training finished after %d epochs", epochs)
        return epochs

    @staticmethod
    def _adjust(w: torch.Tensor, sample: torch.Tensor, d: float, sigma: float, rate: float):
        theta = math.exp(-(d ** 2) / (2 * sigma ** 2))
        w.add_(sample - w, alpha=theta * rate)

    def _prepare(self, samples) -> torch.Tensor:
        vectors = [as_vector(s, dtype=self.grid.dtype) for s in samples]
        if not vectors:
            raise ConfigurationError("Training needs at least one sample vector.")
        for i, v in enumerate(vectors):
            if v.shape[0] != self.grid.input_dim:
                raise DimensionMismatch(
                    f"Sample {i} must have {self.grid.input_dim} components. Got {v.shape[0]}"
                )
        return torch.stack(vectors)
