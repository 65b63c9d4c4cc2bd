from .errors import PersistenceError
from .values import AssociationValue, Upload, UploadMatrix
from .backend import ENTITY_KINDS, AssociationBackend, OwningEntity
from .memory import InMemoryAssociationBackend
from .json_file import JsonFileAssociationBackend
from .association_store import AssociationStore
