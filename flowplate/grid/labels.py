import re
from string import ascii_uppercase as LETTERS
from typing import List, Tuple

from flowplate.grid.errors import InvalidLabelError, ShapeError

LABEL_PATTERN = re.compile(r"^([A-Z])([0-9]{1,2})$")

# Supported container sizes and their (rows, columns) layout.
LAYOUTS = {
  6: (2, 3),
  24: (4, 6),
  48: (6, 8),
  96: (8, 12),
  384: (16, 24),
}


def split_label(label: str) -> Tuple[int, int]:
  """Parse a well label into 0-based (row, column) indices.

  Labels are one uppercase row letter followed by a one or two digit column number, like "A1",
  "H12" or "B07". Lowercase labels are rejected, not normalized.

  Args:
    label: The label to parse.

  Returns:
    A (row, column) tuple of 0-based indices. The indices are not checked against any container.

  Raises:
    InvalidLabelError: If the label does not match the grammar.
  """

  if not isinstance(label, str):
    raise InvalidLabelError(f"Label must be a string, got {label!r}")
  match = LABEL_PATTERN.fullmatch(label)
  if match is None:
    raise InvalidLabelError(f"Invalid label '{label}', expected a row letter A-Z followed by a "
                            "column number, e.g. 'A1'.")
  row_letter, column = match.groups()
  if int(column) < 1:
    raise InvalidLabelError(f"Invalid label '{label}', column numbers start at 1.")
  return LETTERS.index(row_letter), int(column) - 1


def indices_to_label(row: int, column: int) -> str:
  """Canonical label for 0-based (row, column) indices, e.g. (0, 0) -> "A1"."""
  if not 0 <= row < len(LETTERS) or column < 0:
    raise InvalidLabelError(f"No label for row {row}, column {column}")
  return f"{LETTERS[row]}{column + 1}"


def normalize_label(label: str) -> str:
  """Canonical form of a label, e.g. "B07" -> "B7"."""
  return indices_to_label(*split_label(label))


def layout_for_size(size: int) -> Tuple[int, int]:
  """The (rows, columns) layout of a container with `size` positions.

  Raises:
    ShapeError: If `size` is not a supported container size.
  """

  if size not in LAYOUTS:
    raise ShapeError(f"Unsupported container size {size}, expected one of {sorted(LAYOUTS)}")
  return LAYOUTS[size]


def expand_string_range(range_str: str) -> List[str]:
  """Turns a range string into a list of labels. Horizontal, vertical, or grids.

  Labels are returned row by row.

  Args:
    range_str: A string showing a range, like "A1:C3".

  Returns:
    A list of labels.
  """
  if ":" not in range_str:
    raise InvalidLabelError(f"Invalid range: {range_str}")

  start, end = range_str.split(":")
  start_row, start_col = split_label(start)
  end_row, end_col = split_label(end)
  row_range = (
    range(start_row, end_row + 1) if start_row <= end_row else range(start_row, end_row - 1, -1)
  )
  col_range = (
    range(start_col, end_col + 1) if start_col <= end_col else range(start_col, end_col - 1, -1)
  )
  return [indices_to_label(row, col) for row in row_range for col in col_range]
