""" Typed association values.

Associations are keyed by plain strings. Besides plain JSON values (numbers, strings, lists, dicts)
two kinds of values have a fixed persisted form: a reference to a single upload, and a matrix of
upload ids laid out like the wells of a plate.
"""

from dataclasses import dataclass
from typing import List, Union

from flowplate.grid import EMPTY, CoordinateGrid
from flowplate.serializer import JSON


@dataclass(frozen=True)
class Upload:
  """ A reference to a data file uploaded to the host.

  Attributes:
    id: The identifier assigned to the file by the host.
    name: The originating filename, e.g. "A01 Well - A01.fcs".
  """

  id: int
  name: str

  def serialize(self) -> dict:
    return {"type": self.__class__.__name__, "id": self.id, "name": self.name}


@dataclass(frozen=True)
class UploadMatrix:
  """ Upload ids arranged like the wells of a plate, -1 where a well has no upload. """

  upload_matrix: List[List[int]]

  @classmethod
  def from_grid(cls, grid: CoordinateGrid) -> "UploadMatrix":
    return cls(upload_matrix=grid.to_array())

  def to_grid(self) -> CoordinateGrid:
    return CoordinateGrid.from_array(self.upload_matrix, sentinel=EMPTY)

  def serialize(self) -> dict:
    return {
      "type": self.__class__.__name__,
      "upload_matrix": [list(row) for row in self.upload_matrix],
    }


AssociationValue = Union[Upload, UploadMatrix, JSON]
