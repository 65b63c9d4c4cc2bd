""" Tests for label utilities """

import unittest

from flowplate.grid import (
  InvalidLabelError,
  ShapeError,
  expand_string_range,
  indices_to_label,
  layout_for_size,
  normalize_label,
  split_label,
)


class TestLabels(unittest.TestCase):
  """ Tests for label utilities. """

  def test_split_label(self):
    self.assertEqual(split_label("A1"), (0, 0))
    self.assertEqual(split_label("H12"), (7, 11))
    self.assertEqual(split_label("B07"), (1, 6))
    self.assertEqual(split_label("Z99"), (25, 98))

  def test_split_label_invalid(self):
    for label in ["a1", "A", "1", "A100", "A-1", "A0", "A00", " A1", "ÄA1"]:
      with self.subTest(label=label):
        with self.assertRaises(InvalidLabelError):
          split_label(label)
    with self.assertRaises(InvalidLabelError):
      split_label(None)  # type: ignore[arg-type]

  def test_indices_to_label(self):
    self.assertEqual(indices_to_label(0, 0), "A1")
    self.assertEqual(indices_to_label(7, 11), "H12")
    with self.assertRaises(InvalidLabelError):
      indices_to_label(26, 0)

  def test_normalize_label(self):
    self.assertEqual(normalize_label("A01"), "A1")
    self.assertEqual(normalize_label("H12"), "H12")

  def test_layout_for_size(self):
    self.assertEqual(layout_for_size(96), (8, 12))
    self.assertEqual(layout_for_size(24), (4, 6))
    self.assertEqual(layout_for_size(384), (16, 24))
    with self.assertRaises(ShapeError):
      layout_for_size(100)

  def test_expand_string_range(self):
    self.assertEqual(expand_string_range("A1:A3"), ["A1", "A2", "A3"])
    self.assertEqual(expand_string_range("A1:C1"), ["A1", "B1", "C1"])
    self.assertEqual(expand_string_range("A1:B3"), ["A1", "A2", "A3", "B1", "B2", "B3"])

  def test_expand_string_range_reverse(self):
    self.assertEqual(expand_string_range("C3:C1"), ["C3", "C2", "C1"])
    self.assertEqual(expand_string_range("C1:A1"), ["C1", "B1", "A1"])

  def test_expand_string_range_invalid(self):
    with self.assertRaises(InvalidLabelError):
      expand_string_range("A1")
