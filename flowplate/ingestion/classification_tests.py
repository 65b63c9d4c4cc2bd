import unittest

from flowplate.associations import Upload
from flowplate.grid import CoordinateGrid
from flowplate.ingestion import UnclassifiedUploadError, classify_uploads, well_label_of


class TestClassification(unittest.TestCase):
  """ Tests for placing uploads in wells by filename. """

  def setUp(self) -> None:
    super().setUp()
    self.uploads = [
      Upload(id=11, name="A01 Well - A01.fcs"),
      Upload(id=12, name="H12 Well - H12.fcs"),
      Upload(id=13, name="B07 Well - B07.fcs"),
    ]

  def test_classify(self):
    classification = classify_uploads(self.uploads, size=96)
    self.assertTrue(classification.complete)
    grid = classification.grid
    self.assertEqual(grid.get("A1"), 11)
    self.assertEqual(grid.get("H12"), 12)
    self.assertEqual(grid.get("B7"), 13)
    self.assertEqual(grid.count(), 3)
    self.assertEqual(list(grid.occupied_labels(lambda x: x > 0)), ["A1", "B7", "H12"])

  def test_empty(self):
    classification = classify_uploads([], size=24)
    self.assertEqual(classification.grid, CoordinateGrid.create_empty(24))
    self.assertTrue(classification.complete)

  def test_well_label_of(self):
    grid = CoordinateGrid.create_empty(96)
    self.assertEqual(well_label_of(Upload(1, "C10 sample.fcs"), grid), "C10")
    self.assertEqual(well_label_of(Upload(1, "C1_sample.fcs"), grid), None)
    self.assertEqual(well_label_of(Upload(1, "a01.fcs"), grid), None)
    self.assertEqual(well_label_of(Upload(1, "A13.fcs"), grid), None)
    self.assertEqual(well_label_of(Upload(1, ""), grid), None)

  def test_out_of_range_for_plate_size(self):
    uploads = [Upload(1, "A01.fcs"), Upload(2, "E01.fcs")]
    classification = classify_uploads(uploads, size=24)
    self.assertEqual(classification.grid.get("A1"), 1)
    self.assertEqual(classification.unclassified, [Upload(2, "E01.fcs")])

  def test_collect_policy(self):
    uploads = self.uploads + [Upload(id=14, name="export.log")]
    classification = classify_uploads(uploads, policy="collect")
    self.assertFalse(classification.complete)
    self.assertEqual(classification.unclassified, [Upload(id=14, name="export.log")])
    self.assertEqual(classification.grid.count(), 3)

  def test_skip_policy(self):
    uploads = self.uploads + [Upload(id=14, name="export.log")]
    classification = classify_uploads(uploads, policy="skip")
    self.assertTrue(classification.complete)
    self.assertEqual(classification.grid.count(), 3)

  def test_raise_policy(self):
    uploads = self.uploads + [Upload(id=14, name="export.log")]
    with self.assertRaises(UnclassifiedUploadError) as ctx:
      classify_uploads(uploads, policy="raise")
    self.assertEqual(ctx.exception.uploads, [Upload(id=14, name="export.log")])

  def test_duplicate_well_first_wins(self):
    uploads = [Upload(1, "A01 first.fcs"), Upload(2, "A01 second.fcs")]
    classification = classify_uploads(uploads)
    self.assertEqual(classification.grid.get("A1"), 1)
    self.assertEqual(classification.unclassified, [Upload(2, "A01 second.fcs")])

  def test_invalid_policy(self):
    with self.assertRaises(ValueError):
      classify_uploads(self.uploads, policy="ignore")
