class CytometerInputError(Exception):
  """ Raised when a cytometer run is started with unusable inputs, e.g. a plate without samples. """
