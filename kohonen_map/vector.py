import torch

from .errors import DimensionMismatch


__all__ = [
    "DEFAULT_DTYPE",
    "as_vector",
    "distance",
    "distances",
]


DEFAULT_DTYPE = torch.float64


def as_vector(v, dtype: torch.dtype = DEFAULT_DTYPE) -> torch.Tensor:
    """
    Converts `v` into a 1D tensor.

    Args:
        v: A list, tuple, numpy array or tensor of numbers.
        dtype (torch.dtype): Floating point type of the result.

    Returns:
        torch.Tensor: A 1D tensor on the CPU.
    """
    t = torch.as_tensor(v, dtype=dtype)
    if t.dim() != 1:
        raise DimensionMismatch(f"Expected a 1D vector. Got shape {tuple(t.shape)}")
    return t


def _check_lengths(a: torch.Tensor, b: torch.Tensor):
    if a.shape[-1] != b.shape[-1]:
        raise DimensionMismatch(
            f"Vector lengths differ: {a.shape[-1]} != {b.shape[-1]}"
        )


def distance(v, w) -> float:
    """
    Euclidean distance between two vectors of equal length.

    Raises:
        DimensionMismatch: if the lengths differ.
    """
    a, b = as_vector(v), as_vector(w)
    _check_lengths(a, b)
    return torch.linalg.norm(a - b).item()


def distances(v, vectors: torch.Tensor) -> torch.Tensor:
    """
    Euclidean distance between `v` and every row of `vectors`.

    Args:
        v: A vector of length Z.
        vectors (torch.Tensor): A tensor of shape (N, Z).

    Returns:
        torch.Tensor: A 1D tensor of N distances.
    """
    a = as_vector(v, dtype=vectors.dtype)
    _check_lengths(a, vectors)
    return torch.linalg.norm(vectors - a, dim=-1)
