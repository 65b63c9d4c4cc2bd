import logging
from pathlib import Path

import pytest

from flowplate import Config, configure, get_config, project_root

# Tests log everything to the repository's test_logs directory and always run with the default
# ingestion settings, whatever flowplate.ini is found on the machine.
TEST_CONFIG = Config(
  logging=Config.Logging(
    level=logging.DEBUG,
    log_dir=project_root() / Path("test_logs"),
  ),
  ingestion=Config.Ingestion(),
)


@pytest.fixture(autouse=True)
def flowplate_test_config():
  previous = get_config()
  configure(TEST_CONFIG)
  yield
  configure(previous)
