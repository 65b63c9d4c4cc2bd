import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from flowplate.ingestion import DirectoryListingBackend, ListingRequest, UploadIngestionEngine


class TestDirectoryListingBackend(unittest.IsolatedAsyncioTestCase):
  """ Tests for listing exported files from a directory. """

  def setUp(self) -> None:
    super().setUp()
    self.tmp_dir = tempfile.TemporaryDirectory()
    self.addCleanup(self.tmp_dir.cleanup)
    self.root = Path(self.tmp_dir.name)
    self.export_dir = self.root / "Exports" / "run_1"
    self.export_dir.mkdir(parents=True)
    for name in ["B01 Well - B01.fcs", "A01 Well - A01.fcs", "run.log"]:
      (self.export_dir / name).write_text("", encoding="utf-8")

  async def test_lists_matching_files(self):
    backend = DirectoryListingBackend(self.root, prompt=False)
    uploads = await backend.request_listing(
      ListingRequest(directory="Exports/run_1", attempt=1, expected_count=2))
    self.assertEqual([u.name for u in uploads], ["A01 Well - A01.fcs", "B01 Well - B01.fcs"])
    self.assertEqual([u.id for u in uploads], [1, 2])

  async def test_ids_are_stable(self):
    backend = DirectoryListingBackend(self.root, prompt=False)
    request = ListingRequest(directory="Exports/run_1", attempt=1, expected_count=2)
    first = await backend.request_listing(request)
    (self.export_dir / "A00 Well.fcs").write_text("", encoding="utf-8")
    second = await backend.request_listing(request)
    self.assertEqual({u.name: u.id for u in second}[first[0].name], first[0].id)
    self.assertEqual({u.name: u.id for u in second}["A00 Well.fcs"], 3)

  async def test_missing_directory(self):
    backend = DirectoryListingBackend(self.root, prompt=False)
    uploads = await backend.request_listing(
      ListingRequest(directory="Exports/missing", attempt=1, expected_count=1))
    self.assertEqual(uploads, [])

  async def test_prompt(self):
    backend = DirectoryListingBackend(self.root, prompt=True)
    with patch("builtins.input", return_value="") as mock_input:
      await backend.request_listing(
        ListingRequest(directory="Exports/run_1", attempt=2, expected_count=2,
                       previous_incomplete=True))
    mock_input.assert_called_once()
    self.assertIn("please try again", mock_input.call_args[0][0])

  async def test_with_engine(self):
    backend = DirectoryListingBackend(self.root, prompt=False)
    engine = UploadIngestionEngine(backend=backend, export_root="Exports")
    result = await engine.gather_uploads("run_1", expected_count=2)
    self.assertTrue(result.complete)
    self.assertEqual(result.classify(size=96).grid.get("B1"), 2)
