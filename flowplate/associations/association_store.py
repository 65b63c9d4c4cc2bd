import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from flowplate.associations.backend import AssociationBackend, OwningEntity
from flowplate.associations.errors import PersistenceError
from flowplate.associations.values import AssociationValue, UploadMatrix
from flowplate.grid import CoordinateGrid
from flowplate.serializer import deserialize, serialize

logger = logging.getLogger(__name__)


class AssociationStore:
  """ Records key/value associations against one owning entity without overwriting entries.

  Entries are staged by :meth:`put` and only become visible in the backend when :meth:`save` is
  called. A key that is already used on the entity, committed or staged, is never overwritten: the
  entry is staged under the first free key of `key_0`, `key_1`, ... instead.

  Examples:
    Associating an upload twice under the same key:

      >>> store = AssociationStore(plate, backend)
      >>> store.put("SAMPLE_UPLOAD", upload)
      'SAMPLE_UPLOAD'
      >>> store.put("SAMPLE_UPLOAD", other_upload)
      'SAMPLE_UPLOAD_0'
      >>> store.save()
  """

  def __init__(self, entity: OwningEntity, backend: AssociationBackend):
    self.entity = entity
    self.backend = backend
    self._staged: Dict[str, AssociationValue] = {}

  def _committed(self) -> Dict[str, object]:
    if not self.backend.exists(self.entity):
      return {}
    return self.backend.read(self.entity)

  def get(self, key: str) -> Optional[AssociationValue]:
    """ The value of `key`, staged or committed, or None if there is none. """

    if key in self._staged:
      return self._staged[key]
    committed = self._committed()
    if key not in committed:
      return None
    return deserialize(committed[key])  # type: ignore[arg-type]

  def keys(self) -> List[str]:
    """ Committed keys followed by staged keys, each in insertion order. """
    return list(self._committed().keys()) + list(self._staged.keys())

  def free_key(self, key: str) -> str:
    """ `key` if it is unused on the entity, otherwise the first unused `key_<i>`. """

    used = set(self._committed().keys()) | set(self._staged.keys())
    if key not in used:
      return key
    i = 0
    while f"{key}_{i}" in used:
      i += 1
    return f"{key}_{i}"

  def put(self, key: str, value: AssociationValue) -> str:
    """ Stage `value` under `key`, or under a suffixed key if `key` is taken.

    Args:
      key: The preferred key.
      value: The value. Must be serializable, see :mod:`flowplate.serializer`.

    Returns:
      The key the value was staged under.
    """

    serialize(value)  # fail now, not at save time
    used_key = self.free_key(key)
    if used_key != key:
      logger.debug("Key '%s' is taken on %s, staging under '%s'", key, self.entity, used_key)
    self._staged[used_key] = value
    return used_key

  def put_matrix(self, key: str, grid: CoordinateGrid) -> str:
    """ Stage the array form of `grid` under `key`, with the same collision rule as :meth:`put`.

    Returns:
      The key the matrix was staged under.
    """

    return self.put(key, UploadMatrix.from_grid(grid))

  @property
  def staged(self) -> Mapping[str, AssociationValue]:
    return MappingProxyType(self._staged)

  @property
  def has_pending(self) -> bool:
    return len(self._staged) > 0

  def save(self) -> None:
    """ Commit all staged entries to the owning entity.

    Calling `save` again without new :meth:`put` calls does nothing.

    Raises:
      PersistenceError: If the entries could not be committed, e.g. because the owning entity no
        longer exists. The staged entries are discarded and nothing is committed.
    """

    if not self.has_pending:
      return

    entries = {key: serialize(value) for key, value in self._staged.items()}
    try:
      if not self.backend.exists(self.entity):
        raise PersistenceError(f"Cannot save associations, {self.entity} no longer exists")
      self.backend.commit(self.entity, entries)
    except PersistenceError:
      logger.error("Discarding %d staged associations of %s: %s", len(entries), self.entity,
                   list(entries))
      raise
    finally:
      self._staged.clear()

    logger.info("Saved associations %s to %s", list(entries), self.entity)

  def __repr__(self) -> str:
    return f"{self.__class__.__name__}(entity={self.entity!r}, staged={list(self._staged)})"
