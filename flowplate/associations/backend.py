from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict

from flowplate.serializer import JSON

ENTITY_KINDS = ("item", "collection", "plan", "operation")


@dataclass(frozen=True)
class OwningEntity:
  """ The item, collection, plan or operation that associations are attached to. """

  kind: str
  id: int

  def __post_init__(self):
    if self.kind not in ENTITY_KINDS:
      raise ValueError(f"Invalid entity kind '{self.kind}', expected one of {ENTITY_KINDS}")

  @property
  def key(self) -> str:
    return f"{self.kind}_{self.id}"

  def __str__(self) -> str:
    return f"{self.kind} {self.id}"


class AssociationBackend(ABC):
  """ Abstract class for the storage that association entries are committed to.

  Backends are synchronous. Entries are passed in and out in their serialized (JSON) form.
  """

  @abstractmethod
  def exists(self, entity: OwningEntity) -> bool:
    """ Whether the owning entity exists. """

  @abstractmethod
  def read(self, entity: OwningEntity) -> Dict[str, JSON]:
    """ All committed entries of the entity.

    Raises:
      PersistenceError: If the entity does not exist.
    """

  @abstractmethod
  def commit(self, entity: OwningEntity, entries: Dict[str, JSON]) -> None:
    """ Add `entries` to the entity, all or nothing.

    Raises:
      PersistenceError: If the entity does not exist or one of the keys is already committed. In
        that case none of the entries is committed.
    """
