from string import ascii_uppercase as LETTERS
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from flowplate.grid.errors import InvalidLabelError, ShapeError
from flowplate.grid.labels import indices_to_label, layout_for_size, split_label
from flowplate.utils.list import assert_shape, reshape_2d


EMPTY = -1

Predicate = Callable[[int], bool]


class OccupiedLabels(Iterable[str]):
  """ A lazy, restartable view of the labels of a grid whose values satisfy a predicate.

  Every iteration walks the grid again in row-major order, so the view reflects the grid at the
  time of iteration.
  """

  def __init__(self, grid: "CoordinateGrid", predicate: Predicate):
    self._grid = grid
    self._predicate = predicate

  def __iter__(self) -> Iterator[str]:
    for index in range(self._grid.size):
      if self._predicate(self._grid.get_index(index)):
        yield self._grid.label_of(index)

  def __repr__(self) -> str:
    return f"OccupiedLabels({list(self)})"


class CoordinateGrid:
  """ A fixed-size 2d grid of integer values addressed by well labels.

  Positions can be addressed by a linear index (row-major, counted from 0), by (row, column)
  indices, or by a label like "A1" (top left) or "H12" (bottom right of a 96 well plate). Every
  position holds exactly one value; unoccupied positions hold the grid's sentinel (-1 by default).

  Examples:
    Marking the wells that contain samples:

      >>> grid = CoordinateGrid.create_empty(96)
      >>> grid.set("D4", 1)
      >>> list(grid.occupied_labels(lambda v: v > 0))
      ['D4']
  """

  def __init__(
    self,
    num_rows: int,
    num_columns: int,
    cells: Optional[Sequence[int]] = None,
    sentinel: int = EMPTY,
  ):
    """ Initialize a grid.

    Args:
      num_rows: The number of rows. Rows are labeled with letters, so at most 26.
      num_columns: The number of columns.
      cells: The row-major values of the grid. If None, every position is set to `sentinel`.
      sentinel: The value of unoccupied positions.

    Raises:
      ShapeError: If the dimensions are not positive, there are too many rows to label, or `cells`
        has the wrong length.
    """

    if num_rows < 1 or num_columns < 1:
      raise ShapeError(f"Grid dimensions must be positive, got {num_rows}x{num_columns}")
    if num_rows > len(LETTERS):
      raise ShapeError(f"Grid has {num_rows} rows, at most {len(LETTERS)} can be labeled")

    self._num_rows = num_rows
    self._num_columns = num_columns
    self._sentinel = sentinel

    if cells is None:
      self._cells: List[int] = [sentinel] * (num_rows * num_columns)
    else:
      if len(cells) != num_rows * num_columns:
        raise ShapeError(f"Expected {num_rows * num_columns} cells, got {len(cells)}")
      self._cells = list(cells)

  @classmethod
  def create_empty(cls, size: int, sentinel: int = EMPTY) -> "CoordinateGrid":
    """ Create a grid of `size` positions with every position set to `sentinel`.

    Args:
      size: The number of positions, e.g. 96 for an 8x12 plate or 24 for a 4x6 rack.
      sentinel: The value of unoccupied positions.

    Raises:
      ShapeError: If `size` is not a supported container size.
    """

    num_rows, num_columns = layout_for_size(size)
    return cls(num_rows=num_rows, num_columns=num_columns, sentinel=sentinel)

  @classmethod
  def from_dimensions(cls, num_rows: int, num_columns: int, sentinel: int = EMPTY
                      ) -> "CoordinateGrid":
    return cls(num_rows=num_rows, num_columns=num_columns, sentinel=sentinel)

  @classmethod
  def from_array(cls, matrix: Sequence[Sequence[int]], sentinel: int = EMPTY) -> "CoordinateGrid":
    """ Create a grid from a row-major 2d list, like a collection's sample matrix.

    Raises:
      ShapeError: If the matrix is empty, has empty rows, or is not rectangular.
    """

    if not isinstance(matrix, (list, tuple)) or len(matrix) == 0:
      raise ShapeError("Matrix must be a non-empty list of rows.")
    if not all(isinstance(row, (list, tuple)) for row in matrix):
      raise ShapeError("Every row of the matrix must be a list.")
    shape = (len(matrix), len(matrix[0]))
    try:
      assert_shape(matrix, shape)
    except ValueError as e:
      raise ShapeError(f"Matrix is not rectangular: {matrix}") from e

    return cls(num_rows=shape[0], num_columns=shape[1],
               cells=[value for row in matrix for value in row], sentinel=sentinel)

  @property
  def num_rows(self) -> int:
    return self._num_rows

  @property
  def num_columns(self) -> int:
    return self._num_columns

  @property
  def shape(self) -> Tuple[int, int]:
    return (self._num_rows, self._num_columns)

  @property
  def size(self) -> int:
    return len(self._cells)

  @property
  def sentinel(self) -> int:
    return self._sentinel

  def index_of(self, label: str) -> int:
    """ The linear (row-major) index of a label.

    Raises:
      InvalidLabelError: If the label is malformed or outside this grid.
    """

    row, column = split_label(label)
    if row >= self._num_rows or column >= self._num_columns:
      raise InvalidLabelError(f"Label '{label}' is outside of this {self._num_rows}x"
                              f"{self._num_columns} grid")
    return row * self._num_columns + column

  def label_of(self, index: int) -> str:
    """ The canonical label of a linear index, e.g. 13 -> "B2" on a 96 well grid. """
    self._check_index(index)
    return indices_to_label(index // self._num_columns, index % self._num_columns)

  def _check_index(self, index: int):
    if not 0 <= index < self.size:
      raise IndexError(f"Index {index} is outside of this grid of size {self.size}")

  def get(self, label: str) -> int:
    """ The value at `label`, or the sentinel if the position was never set. """
    return self._cells[self.index_of(label)]

  def set(self, label: str, value: int) -> None:
    """ Set the value at `label`.

    Raises:
      InvalidLabelError: If the label is malformed or outside this grid. The grid is not changed.
    """

    self._cells[self.index_of(label)] = value

  def get_index(self, index: int) -> int:
    self._check_index(index)
    return self._cells[index]

  def set_index(self, index: int, value: int) -> None:
    self._check_index(index)
    self._cells[index] = value

  def to_array(self) -> List[List[int]]:
    """ The values of this grid as a row-major 2d list. The list is a copy. """
    return reshape_2d(self._cells, self.shape)

  def occupied_labels(self, predicate: Optional[Predicate] = None) -> OccupiedLabels:
    """ Labels whose value satisfies `predicate`, in row-major order.

    Args:
      predicate: Test applied to each value. Defaults to "is not the sentinel".

    Returns:
      A lazy view that can be iterated any number of times.
    """

    if predicate is None:
      predicate = self._is_occupied
    return OccupiedLabels(self, predicate)

  def count(self, predicate: Optional[Predicate] = None) -> int:
    return sum(1 for _ in self.occupied_labels(predicate))

  def _is_occupied(self, value: int) -> bool:
    return value != self._sentinel

  def __len__(self) -> int:
    return self.size

  def __iter__(self) -> Iterator[Tuple[str, int]]:
    for index, value in enumerate(self._cells):
      yield self.label_of(index), value

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, CoordinateGrid):
      return NotImplemented
    return (self.shape == other.shape and self._sentinel == other._sentinel and
            self._cells == other._cells)

  def __repr__(self) -> str:
    return (f"{self.__class__.__name__}(num_rows={self._num_rows}, "
            f"num_columns={self._num_columns}, occupied={self.count()})")

  def make_grid(self, predicate: Optional[Predicate] = None) -> str:
    """ A text table of the grid, with "O" for positions satisfying `predicate` and "-" otherwise.

    Used to show the operator which wells should contain samples.
    """

    if predicate is None:
      predicate = self._is_occupied

    max_digits = len(str(self._num_columns))
    header_row = "    " + " ".join(f"{i+1:<{max_digits}}" for i in range(self._num_columns))

    spacer = " " * max(1, max_digits)
    rows = []
    for r in range(self._num_rows):
      marks = ["O" if predicate(self._cells[r * self._num_columns + c]) else "-"
               for c in range(self._num_columns)]
      rows.append(LETTERS[r] + ":  " + spacer.join(marks))

    footer_text = f"{self._num_columns}x{self._num_rows} {self.__class__.__name__}"
    return repr(self) + "\n" + header_row + "\n" + "\n".join(rows) + "\n" + footer_text

  def print_grid(self, predicate: Optional[Predicate] = None):
    print(self.make_grid(predicate=predicate))

  def serialize(self) -> dict:
    return {
      "num_rows": self._num_rows,
      "num_columns": self._num_columns,
      "sentinel": self._sentinel,
      "cells": self.to_array(),
    }

  @classmethod
  def deserialize(cls, data: dict) -> "CoordinateGrid":
    grid = cls.from_array(data["cells"], sentinel=data.get("sentinel", EMPTY))
    if grid.shape != (data["num_rows"], data["num_columns"]):
      raise ShapeError(f"Serialized cells do not match dimensions {data['num_rows']}x"
                       f"{data['num_columns']}")
    return grid
