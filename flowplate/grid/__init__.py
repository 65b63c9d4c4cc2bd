from .errors import InvalidLabelError, ShapeError
from .labels import (
  LAYOUTS,
  expand_string_range,
  indices_to_label,
  layout_for_size,
  normalize_label,
  split_label,
)
from .coordinate_grid import EMPTY, CoordinateGrid, OccupiedLabels
