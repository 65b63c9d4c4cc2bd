from .list import (
  assert_shape,
  flatten_2d,
  reshape_2d,
)
