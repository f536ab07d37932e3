import math
import random
import unittest

import torch

from kohonen_map import DimensionMismatch
from kohonen_map.vector import as_vector, distance, distances


class TestDistance(unittest.TestCase):

    def test_known_value(self):
        self.assertAlmostEqual(distance([0, 0, 0], [1, 2, 2]), 3.0)

    def test_zero_for_identical_vectors(self):
        v = [0.3, -1.5, 4.0, 2.25]
        self.assertEqual(distance(v, v), 0.0)

    def test_symmetric(self):
        v, w = [1.0, -2.0, 0.5], [-3.0, 4.0, 1.5]
        self.assertEqual(distance(v, w), distance(w, v))

    def test_triangle_inequality(self):
        rng = random.Random(7)
        for _ in range(50):
            a, b, c = ([rng.uniform(-10, 10) for _ in range(4)] for _ in range(3))
            self.assertLessEqual(distance(a, c), distance(a, b) + distance(b, c) + 1e-9)

    def test_accepts_tensors(self):
        self.assertAlmostEqual(distance(torch.tensor([3.0, 0.0]), torch.tensor([0.0, 4.0])), 5.0)

    def test_length_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            distance([1, 2, 3], [1, 2])

    def test_length_mismatch_is_a_value_error(self):
        with self.assertRaises(ValueError):
            distance([1], [1, 2])


class TestDistances(unittest.TestCase):

    def test_matches_pairwise_distance(self):
        vectors = torch.tensor([[0.0, 0.0], [3.0, 4.0], [-1.0, 1.0]], dtype=torch.float64)
        result = distances([0.0, 0.0], vectors)
        self.assertEqual(result.shape, (3,))
        for i, row in enumerate(vectors):
            self.assertAlmostEqual(result[i].item(), distance([0.0, 0.0], row))

    def test_length_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            distances([1.0, 2.0, 3.0], torch.zeros(4, 2, dtype=torch.float64))


class TestAsVector(unittest.TestCase):

    def test_converts_to_float64(self):
        v = as_vector([1, 2, 3])
        self.assertEqual(v.dtype, torch.float64)
        self.assertEqual(v.tolist(), [1.0, 2.0, 3.0])

    def test_rejects_matrices(self):
        with self.assertRaises(DimensionMismatch):
            as_vector([[1, 2], [3, 4]])

    def test_rejects_scalars(self):
        with self.assertRaises(DimensionMismatch):
            as_vector(math.pi)


if __name__ == '__main__':
    unittest.main()
