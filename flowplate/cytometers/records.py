""" Minimal views of the host records a cytometer run works with. """

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Item:
  """ A physical item, e.g. a tube of diluted calibration beads.

  Attributes:
    id: The host id of the item.
    sample_id: The host id of the sample the item contains.
    sample_name: The name of the sample, shown to the operator.
    lot_no: The lot number, for reagents like calibration beads.
  """

  id: int
  sample_id: int
  sample_name: str = ""
  lot_no: Optional[str] = None


@dataclass
class Collection:
  """ A plate or rack, with the sample id in every position and -1 where there is no sample. """

  id: int
  matrix: List[List[int]] = field(default_factory=list)

  @property
  def dimensions(self) -> List[int]:
    if len(self.matrix) == 0:
      return []
    return [len(self.matrix), len(self.matrix[0])]

  @property
  def num_samples(self) -> int:
    return sum(1 for row in self.matrix for value in row if value > 0)
