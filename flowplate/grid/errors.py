class ShapeError(ValueError):
  """ Raised when a matrix is empty, not rectangular, or does not match a supported grid size. """


class InvalidLabelError(ValueError):
  """ Raised when a well label does not match the label grammar or is outside the grid.

  The grid the label was used on is left unchanged.
  """
