import math
import unittest

from kohonen_map import ConfigurationError, FormatError
from kohonen_map.topology import (
    HexagonalTopology,
    RectangularTopology,
    make_topology,
    parse_output_dim,
)


class TestParseOutputDim(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(parse_output_dim("5x6"), (5, 6))
        self.assertEqual(parse_output_dim("12x3"), (12, 3))
        self.assertEqual(parse_output_dim(" 2x2 "), (2, 2))

    def test_malformed(self):
        for bad in ["", "5", "5x", "x6", "5X6", "5x6x7", "a x b", "5 x 6", "-5x6", "5.0x6"]:
            with self.subTest(output_dim=bad):
                with self.assertRaises(FormatError):
                    parse_output_dim(bad)

    def test_zero_dimension(self):
        with self.assertRaises(FormatError):
            parse_output_dim("0x4")

    def test_not_a_string(self):
        with self.assertRaises(FormatError):
            parse_output_dim((5, 6))

    def test_format_error_is_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            parse_output_dim("5-6")


class TestRectangularTopology(unittest.TestCase):

    def setUp(self):
        self.topology = RectangularTopology("5x6")

    def test_shape_and_output_dim(self):
        self.assertEqual(self.topology.shape, (5, 6))
        self.assertEqual(self.topology.output_dim, "5x6")
        self.assertEqual(self.topology.num_cells, 30)

    def test_radius_is_half_the_larger_side(self):
        self.assertEqual(self.topology.radius, 3.0)
        self.assertEqual(RectangularTopology("7x2").radius, 3.5)

    def test_coordinates_row_major(self):
        coords = RectangularTopology("2x3").coordinates()
        self.assertEqual(coords, [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)])

    def test_planar_distance(self):
        self.assertEqual(self.topology.planar_distance((0, 0), (0, 0)), 0.0)
        self.assertEqual(self.topology.planar_distance((0, 0), (3, 4)), 5.0)
        self.assertAlmostEqual(self.topology.planar_distance((1, 1), (2, 2)), math.sqrt(2))

    def test_distance_map_agrees_with_planar_distance(self):
        dmap = self.topology.distance_map(2, 3)
        self.assertEqual(tuple(dmap.shape), (5, 6))
        for x, y in self.topology.coordinates():
            self.assertAlmostEqual(dmap[x, y].item(), self.topology.planar_distance((2, 3), (x, y)))

    def test_contains(self):
        self.assertTrue(self.topology.contains(4, 5))
        self.assertFalse(self.topology.contains(5, 0))
        self.assertFalse(self.topology.contains(0, -1))


class TestHexagonalTopology(unittest.TestCase):

    def setUp(self):
        self.topology = HexagonalTopology(6)

    def test_shape_and_radius(self):
        self.assertEqual(self.topology.shape, (6, 6))
        self.assertEqual(self.topology.diameter, 6)
        self.assertEqual(self.topology.radius, 3.0)
        self.assertEqual(self.topology.output_dim, 6)

    def test_six_nearest_neighbours(self):
        center = (3, 3)
        nearest = [c for c in self.topology.coordinates()
                   if self.topology.planar_distance(center, c) == 1]
        self.assertEqual(sorted(nearest), [(2, 3), (2, 4), (3, 2), (3, 4), (4, 2), (4, 3)])

    def test_zero_only_for_identical_coordinates(self):
        coords = self.topology.coordinates()
        for a in coords:
            for b in coords:
                d = self.topology.planar_distance(a, b)
                self.assertEqual(d == 0, a == b)

    def test_symmetric(self):
        coords = self.topology.coordinates()
        for a in coords:
            for b in coords:
                self.assertEqual(self.topology.planar_distance(a, b), self.topology.planar_distance(b, a))

    def test_increases_along_the_lattice(self):
        steps = [self.topology.planar_distance((0, 5), (k, 5 - k)) for k in range(6)]
        self.assertEqual(steps, [0.0, 1.0, 2.0, 3.0, 4.0, 5.0])
        steps = [self.topology.planar_distance((0, 0), (k, k)) for k in range(6)]
        self.assertEqual(steps, [0.0, 2.0, 4.0, 6.0, 8.0, 10.0])

    def test_distance_map_agrees_with_planar_distance(self):
        for center in [(0, 0), (2, 4), (5, 1)]:
            dmap = self.topology.distance_map(*center)
            for x, y in self.topology.coordinates():
                self.assertEqual(dmap[x, y].item(), self.topology.planar_distance(center, (x, y)))

    def test_invalid_diameter(self):
        for bad in [0, -3, 2.5, True, "abc", None]:
            with self.subTest(output_dim=bad):
                with self.assertRaises(ConfigurationError):
                    HexagonalTopology(bad)

    def test_numeric_string(self):
        self.assertEqual(HexagonalTopology("4").shape, (4, 4))


class TestMakeTopology(unittest.TestCase):

    def test_picks_variant(self):
        self.assertIsInstance(make_topology("3x4"), RectangularTopology)
        self.assertIsInstance(make_topology(4), HexagonalTopology)

    def test_non_numeric_strings_are_rectangular(self):
        self.assertIsInstance(make_topology(" 6 "), HexagonalTopology)
        for bad in ["5*6", "5X6", "six"]:
            with self.subTest(output_dim=bad):
                with self.assertRaises(FormatError):
                    make_topology(bad)

    def test_passes_topologies_through(self):
        topology = HexagonalTopology(3)
        self.assertIs(make_topology(topology), topology)


if __name__ == '__main__':
    unittest.main()
