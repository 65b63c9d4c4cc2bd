""" Tests for CoordinateGrid """

import unittest

from flowplate.grid import CoordinateGrid, InvalidLabelError, ShapeError


class TestCoordinateGrid(unittest.TestCase):
  """ Tests for the CoordinateGrid class. """

  def setUp(self) -> None:
    super().setUp()
    self.maxDiff = None
    self.grid = CoordinateGrid.create_empty(96, -1)

  def test_create_empty_96(self):
    self.assertEqual(len(self.grid), 96)
    self.assertEqual(self.grid.shape, (8, 12))
    self.assertTrue(all(value == -1 for _, value in self.grid))
    self.assertEqual(list(self.grid.occupied_labels(lambda x: x > 0)), [])

  def test_create_empty_24(self):
    grid = CoordinateGrid.create_empty(24)
    self.assertEqual(grid.shape, (4, 6))
    self.assertEqual(grid.label_of(23), "D6")

  def test_create_empty_custom_sentinel(self):
    grid = CoordinateGrid.create_empty(24, sentinel=0)
    self.assertEqual(grid.get("A1"), 0)
    self.assertEqual(grid.count(), 0)

  def test_create_empty_unsupported_size(self):
    with self.assertRaises(ShapeError):
      CoordinateGrid.create_empty(95)

  def test_set_get(self):
    self.grid.set("D4", 7)
    self.assertEqual(self.grid.get("D4"), 7)
    self.assertEqual(self.grid.get("D5"), -1)

  def test_set_does_not_touch_other_cells(self):
    before = self.grid.to_array()
    self.grid.set("H12", 42)
    after = self.grid.to_array()
    changed = [(r, c) for r in range(8) for c in range(12) if before[r][c] != after[r][c]]
    self.assertEqual(changed, [(7, 11)])

  def test_every_label_round_trips(self):
    for index in range(self.grid.size):
      label = self.grid.label_of(index)
      self.grid.set(label, index)
      self.assertEqual(self.grid.index_of(label), index)
    self.assertEqual(self.grid.to_array()[1][0], 12)

  def test_labels(self):
    self.assertEqual(self.grid.label_of(0), "A1")
    self.assertEqual(self.grid.label_of(11), "A12")
    self.assertEqual(self.grid.label_of(12), "B1")
    self.assertEqual(self.grid.label_of(95), "H12")
    with self.assertRaises(IndexError):
      self.grid.label_of(96)

  def test_valid_labels(self):
    self.grid.set("A1", 1)
    self.grid.set("H12", 2)
    self.assertEqual(self.grid.get("A1"), 1)
    self.assertEqual(self.grid.get("H12"), 2)

  def test_zero_padded_label(self):
    self.grid.set("A01", 3)
    self.assertEqual(self.grid.get("A1"), 3)

  def test_invalid_labels(self):
    for label in ["I1", "A13", "A0", "", "1A", "A", "AA1", "A123", "A1 "]:
      with self.subTest(label=label):
        with self.assertRaises(InvalidLabelError):
          self.grid.set(label, 1)
        with self.assertRaises(InvalidLabelError):
          self.grid.get(label)

  def test_lowercase_label_rejected(self):
    with self.assertRaises(InvalidLabelError):
      self.grid.set("a1", 1)
    with self.assertRaises(InvalidLabelError):
      self.grid.get("h12")

  def test_invalid_set_leaves_grid_unchanged(self):
    self.grid.set("B2", 5)
    before = self.grid.to_array()
    with self.assertRaises(InvalidLabelError):
      self.grid.set("Z99", 6)
    self.assertEqual(self.grid.to_array(), before)

  def test_label_bounds_depend_on_grid(self):
    grid = CoordinateGrid.create_empty(24)
    grid.set("D6", 1)
    with self.assertRaises(InvalidLabelError):
      grid.set("E1", 1)
    with self.assertRaises(InvalidLabelError):
      grid.set("A7", 1)

  def test_from_array_round_trip(self):
    matrices = [
      [[1]],
      [[1, 2, 3], [4, 5, 6]],
      [[-1] * 12 for _ in range(8)],
      [[i * 6 + j for j in range(6)] for i in range(4)],
    ]
    for matrix in matrices:
      with self.subTest(matrix=matrix):
        self.assertEqual(CoordinateGrid.from_array(matrix).to_array(), matrix)

  def test_from_array_errors(self):
    with self.assertRaises(ShapeError):
      CoordinateGrid.from_array([])
    with self.assertRaises(ShapeError):
      CoordinateGrid.from_array([[]])
    with self.assertRaises(ShapeError):
      CoordinateGrid.from_array([[1, 2], [3]])
    with self.assertRaises(ShapeError):
      CoordinateGrid.from_array([1, 2, 3])  # type: ignore[list-item]
    with self.assertRaises(ShapeError):
      CoordinateGrid.from_array([[0]] * 27)

  def test_to_array_is_a_copy(self):
    array = self.grid.to_array()
    array[0][0] = 100
    self.assertEqual(self.grid.get("A1"), -1)

  def test_occupied_labels_row_major(self):
    self.grid.set("B1", 3)
    self.grid.set("A12", 2)
    self.grid.set("A2", 1)
    self.assertEqual(list(self.grid.occupied_labels(lambda x: x > 0)), ["A2", "A12", "B1"])

  def test_occupied_labels_is_restartable(self):
    self.grid.set("C3", 9)
    labels = self.grid.occupied_labels(lambda x: x > 0)
    self.assertEqual(list(labels), ["C3"])
    self.assertEqual(list(labels), ["C3"])

  def test_occupied_labels_is_lazy(self):
    labels = self.grid.occupied_labels()
    self.grid.set("E5", 1)
    self.assertEqual(list(labels), ["E5"])

  def test_equality(self):
    other = CoordinateGrid.create_empty(96)
    self.assertEqual(self.grid, other)
    other.set("A1", 1)
    self.assertNotEqual(self.grid, other)

  def test_serialize(self):
    self.grid.set("G7", 11)
    self.assertEqual(CoordinateGrid.deserialize(self.grid.serialize()), self.grid)

  def test_make_grid(self):
    grid = CoordinateGrid.create_empty(24)
    grid.set("D4", 1)
    grid.set("D5", 1)
    text = grid.make_grid(lambda x: x > 0)
    lines = text.split("\n")
    self.assertEqual(lines[1], "    1 2 3 4 5 6")
    self.assertEqual(lines[2], "A:  - - - - - -")
    self.assertEqual(lines[5], "D:  - - - O O -")
    self.assertEqual(lines[-1], "6x4 CoordinateGrid")
