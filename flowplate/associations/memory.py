import copy
import logging
from typing import Dict, Optional

from flowplate.associations.backend import AssociationBackend, OwningEntity
from flowplate.associations.errors import PersistenceError
from flowplate.serializer import JSON

logger = logging.getLogger(__name__)


class InMemoryAssociationBackend(AssociationBackend):
  """ Keeps association entries in a dictionary. Useful for testing and for dry runs. """

  def __init__(self):
    self._entities: Dict[OwningEntity, Dict[str, JSON]] = {}

  def create(self, entity: OwningEntity, entries: Optional[Dict[str, JSON]] = None) -> None:
    if entity in self._entities:
      raise ValueError(f"{entity} already exists")
    self._entities[entity] = copy.deepcopy(entries) if entries is not None else {}

  def remove(self, entity: OwningEntity) -> None:
    del self._entities[entity]

  def exists(self, entity: OwningEntity) -> bool:
    return entity in self._entities

  def read(self, entity: OwningEntity) -> Dict[str, JSON]:
    if entity not in self._entities:
      raise PersistenceError(f"{entity} does not exist")
    return copy.deepcopy(self._entities[entity])

  def commit(self, entity: OwningEntity, entries: Dict[str, JSON]) -> None:
    if entity not in self._entities:
      raise PersistenceError(f"{entity} does not exist")
    current = self._entities[entity]
    conflicts = [key for key in entries if key in current]
    if len(conflicts) > 0:
      raise PersistenceError(f"Keys {conflicts} are already associated to {entity}")
    current.update(copy.deepcopy(entries))
    logger.debug("Committed %d entries to %s", len(entries), entity)
