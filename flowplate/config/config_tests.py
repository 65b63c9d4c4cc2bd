import logging
import os
import tempfile
import unittest
from pathlib import Path

from flowplate.config import get_config_file, load_config, read_config, write_config
from flowplate.config.config import Config
from flowplate.config.formats import ConfigLoader, ConfigSaver, MultiLoader
from flowplate.config.formats.ini_config import IniLoader, IniSaver
from flowplate.config.formats.json_config import JsonLoader, JsonSaver


class ConfigTests(unittest.TestCase):
  """ Tests for flowplate.config """

  def setUp(self) -> None:
    super().setUp()
    self.tmp_path = Path(tempfile.mkdtemp())

  def run_read_write_test(
    self,
    format_loader: ConfigLoader,
    format_saver: ConfigSaver,
    write_to: Path,
    should_be: Config,
  ):
    write_config(write_to, should_be, format_saver)
    cfg = read_config(write_to, format_loader)
    self.assertEqual(cfg, should_be)

  def test_read_write(self):
    fake_config = Config(
      logging=Config.Logging(
        level=logging.DEBUG,
        log_dir=self.tmp_path / "logs",
      ),
      ingestion=Config.Ingestion(
        max_attempts=5,
        export_root="D:/Exports",
        unclassified_policy="skip",
      ),
    )
    cases = (
      (IniLoader(), IniSaver(), "fake_config.ini"),
      (JsonLoader(), JsonSaver(), "fake_config.json"),
    )
    for rdr, wr, fp in cases:
      self.run_read_write_test(rdr, wr, self.tmp_path / fp, fake_config)

  def test_default_config_round_trip(self):
    self.run_read_write_test(IniLoader(), IniSaver(), self.tmp_path / "default.ini",
                                     Config())

  def test_multi_loader_reads_json(self):
    path = self.tmp_path / "config.json"
    write_config(path, Config(), JsonSaver())
    self.assertEqual(read_config(path), Config())

  def test_multi_loader_fails(self):
    path = self.tmp_path / "config.txt"
    path.write_text("this is not a config", encoding="utf-8")
    with self.assertRaises(ValueError):
      read_config(path, MultiLoader([IniLoader(), JsonLoader()]))

  def test_from_dict_defaults(self):
    cfg = Config.from_dict({"logging": {"level": "WARNING"}})
    self.assertEqual(cfg.logging.level, logging.WARNING)
    self.assertIsNone(cfg.logging.log_dir)
    self.assertEqual(cfg.ingestion, Config.Ingestion())

  def test_invalid_ingestion_settings(self):
    with self.assertRaises(ValueError):
      Config.Ingestion(max_attempts=0)
    with self.assertRaises(ValueError):
      Config.Ingestion(unclassified_policy="ignore")

  def test_get_config_file_searches_parents(self):
    nested = self.tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    write_config(self.tmp_path / "test_flowplate.ini", Config())
    self.assertEqual(get_config_file("test_flowplate", nested), self.tmp_path / "test_flowplate.ini")
    self.assertIsNone(get_config_file("does_not_exist_anywhere", nested))

  def test_load_config_creates_default(self):
    cwd = Path.cwd()
    os.chdir(self.tmp_path)
    try:
      test_path = self.tmp_path / "test_config.ini"
      self.assertFalse(test_path.exists())
      cfg = load_config("test_config", create_default=True, create_module_level=False)
      self.assertTrue(test_path.exists())
      self.assertEqual(cfg, Config())
    finally:
      os.chdir(cwd)
