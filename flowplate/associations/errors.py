class PersistenceError(Exception):
  """ Raised when staged associations cannot be committed to their owning entity.

  Usually the owning entity no longer exists. The staged entries are discarded when this is raised,
  so the caller has to `put` them again before the next `save`.
  """
