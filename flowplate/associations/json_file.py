import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from flowplate.__version__ import ASSOCIATION_FORMAT_VERSION
from flowplate.associations.backend import AssociationBackend, OwningEntity
from flowplate.associations.errors import PersistenceError
from flowplate.serializer import JSON

logger = logging.getLogger(__name__)


class JsonFileAssociationBackend(AssociationBackend):
  """ Stores the entries of each owning entity in its own JSON file.

  The file of an entity is `<directory>/<kind>_<id>.json` and looks like this:

  .. code-block:: json

    {
      "version": "1.0.0",
      "entries": {"SAMPLE_UPLOADS": {"type": "UploadMatrix", "upload_matrix": [[...]]}}
    }

  A commit writes the complete new file next to the old one and then replaces it, so readers see
  either all or none of the committed entries.
  """

  encoding = "utf-8"

  def __init__(self, directory: Union[str, Path]):
    self.directory = Path(directory)

  def path_for(self, entity: OwningEntity) -> Path:
    return self.directory / f"{entity.key}.json"

  def create(self, entity: OwningEntity, entries: Optional[Dict[str, JSON]] = None) -> None:
    if self.exists(entity):
      raise ValueError(f"{entity} already exists at {self.path_for(entity)}")
    self.directory.mkdir(parents=True, exist_ok=True)
    self._write(entity, entries or {})

  def exists(self, entity: OwningEntity) -> bool:
    return self.path_for(entity).exists()

  def read(self, entity: OwningEntity) -> Dict[str, JSON]:
    path = self.path_for(entity)
    try:
      with open(path, "r", encoding=self.encoding) as f:
        data = json.load(f)
    except FileNotFoundError as e:
      raise PersistenceError(f"{entity} does not exist at {path}") from e
    return data["entries"]

  def commit(self, entity: OwningEntity, entries: Dict[str, JSON]) -> None:
    current = self.read(entity)
    conflicts = [key for key in entries if key in current]
    if len(conflicts) > 0:
      raise PersistenceError(f"Keys {conflicts} are already associated to {entity}")
    current.update(entries)
    self._write(entity, current)
    logger.debug("Committed %d entries to %s", len(entries), self.path_for(entity))

  def _write(self, entity: OwningEntity, entries: Dict[str, JSON]) -> None:
    path = self.path_for(entity)
    data = {"version": ASSOCIATION_FORMAT_VERSION, "entries": entries}
    f = tempfile.NamedTemporaryFile(  # pylint: disable=consider-using-with
      "w", encoding=self.encoding, dir=self.directory,
      prefix=f".{entity.key}.", suffix=".tmp", delete=False)
    try:
      with f:
        json.dump(data, f, indent=2)
      os.replace(f.name, path)
    except BaseException:
      os.unlink(f.name)
      raise
