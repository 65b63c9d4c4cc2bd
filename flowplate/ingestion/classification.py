import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from flowplate.associations.values import Upload
from flowplate.config.config import UNCLASSIFIED_POLICIES
from flowplate.grid import EMPTY, CoordinateGrid, InvalidLabelError
from flowplate.ingestion.errors import UnclassifiedUploadError

logger = logging.getLogger(__name__)

# Exported files are named after their well, zero padded, e.g. "A01 Well - A01.fcs".
PREFIX_LENGTH = 3


@dataclass
class Classification:
  """ Uploads placed in the wells of a plate.

  Attributes:
    grid: Upload id per well, -1 for wells without an upload.
    unclassified: Uploads that could not be placed, in upload order. Always empty under the "skip"
      policy.
  """

  grid: CoordinateGrid
  unclassified: List[Upload] = field(default_factory=list)

  @property
  def complete(self) -> bool:
    return len(self.unclassified) == 0


def well_label_of(upload: Upload, grid: CoordinateGrid) -> Optional[str]:
  """ The label of the well `upload` belongs to, or None if its name has no valid well prefix. """
  prefix = upload.name[:PREFIX_LENGTH]
  try:
    return grid.label_of(grid.index_of(prefix))
  except InvalidLabelError:
    return None


def classify_uploads(
  uploads: Sequence[Upload],
  size: int = 96,
  policy: str = "collect",
) -> Classification:
  """ Place uploads in a fresh grid by the well label their filename starts with.

  The first three characters of the filename are read as a well label, so "A01 Well - A01.fcs"
  goes to A1. If two uploads claim the same well, the first one keeps it.

  Args:
    uploads: The uploads to place.
    size: The number of wells of the plate, e.g. 96 or 24.
    policy: What to do with uploads that cannot be placed: "collect" them in
      :attr:`Classification.unclassified`, "skip" them, or "raise" an error.

  Raises:
    UnclassifiedUploadError: If `policy` is "raise" and an upload cannot be placed.
  """

  if policy not in UNCLASSIFIED_POLICIES:
    raise ValueError(f"Invalid policy '{policy}', expected one of {UNCLASSIFIED_POLICIES}")

  grid = CoordinateGrid.create_empty(size, EMPTY)
  unclassified: List[Upload] = []
  for upload in uploads:
    label = well_label_of(upload, grid)
    if label is None:
      logger.warning("Upload %d '%s' does not start with a well label of a %d well plate",
                     upload.id, upload.name, size)
      unclassified.append(upload)
    elif grid.get(label) != EMPTY:
      logger.warning("Upload %d '%s' is for well %s, which already has upload %d",
                     upload.id, upload.name, label, grid.get(label))
      unclassified.append(upload)
    else:
      grid.set(label, upload.id)

  if len(unclassified) > 0 and policy == "raise":
    names = ", ".join(f"'{u.name}'" for u in unclassified)
    raise UnclassifiedUploadError(f"Could not place uploads {names} in a well", unclassified)
  if policy == "skip":
    unclassified = []
  return Classification(grid=grid, unclassified=unclassified)
