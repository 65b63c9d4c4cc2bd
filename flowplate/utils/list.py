"""Utilities for working with lists."""

from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def assert_shape(list_: Sequence[Sequence[T]], shape: Tuple[int, int]):
  """Assert that a list has the correct shape.

  Args:
    list_: The list to check.
    shape: The expected shape.
  """

  if len(list_) != shape[0]:
    raise ValueError(f"List has incorrect shape: {list_}")
  for row in list_:
    if len(row) != shape[1]:
      raise ValueError(f"List has incorrect shape: {list_}")


def reshape_2d(list_: List[T], shape: Tuple[int, int]) -> List[List[T]]:
  """Reshape a list into a 2d list.

  Args:
    list_: The list to reshape.
    shape: A tuple (rows, columns) specifying the desired shape of the 2D list.

  Returns:
    A 2D list with the specified number of rows and columns.

  Raises:
    ValueError: If the total number of elements in the list does not match the specified shape.
  """

  if not len(list_) == shape[0] * shape[1]:
    raise ValueError(f"Cannot reshape list {list_} into shape {shape}")

  new_list: List[List[T]] = []

  for i in range(shape[0]):  # Iterating over rows
    new_list.append([])
    for j in range(shape[1]):  # Iterating over columns
      new_list[i].append(list_[i * shape[1] + j])

  return new_list


def flatten_2d(list_: Sequence[Sequence[T]]) -> List[T]:
  """Flatten a 2d list row by row.

  Example:
    >>> flatten_2d([[1, 2], [3, 4]])
    [1, 2, 3, 4]
  """
  return [item for row in list_ for item in row]
