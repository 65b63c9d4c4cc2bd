"""Definition file for various version numbers."""

import os

# Version number for flowplate
_version_file = os.path.join(os.path.dirname(__file__), "version.txt")
with open(_version_file, "r", encoding="utf-8") as f:
  __version__ = f.read().strip()

# Version of the serialized association format written by the persistence backends.
ASSOCIATION_FORMAT_VERSION = "1.0.0"
