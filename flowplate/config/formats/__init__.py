""" ConfigLoader and ConfigSaver load and save configs from and to IO streams. """

from abc import ABC, abstractmethod
from typing import IO, List

from flowplate.config.config import Config


class ConfigLoader(ABC):
  """ConfigLoader is an abstract class for loading a Config object from a stream. """

  extension: str

  @abstractmethod
  def load(self, r: IO) -> Config:
    """ Load a Config object."""


class ConfigSaver(ABC):
  """ConfigSaver is an abstract class for saving a Config object to a stream. """

  extension: str

  @abstractmethod
  def save(self, w: IO, cfg: Config):
    """ Save a Config object."""


class MultiLoader(ConfigLoader):
  """A ConfigLoader that tries each of its loaders in turn."""

  def __init__(self, loaders: List[ConfigLoader]):
    self.loaders = loaders

  # Unknown what the Exception will be when trying to load the stream so catch all and try the next.
  def load(self, r: IO) -> Config:
    errors = []
    for loader in self.loaders:
      try:
        r.seek(0)
        return loader.load(r)
      except Exception as e: # pylint: disable=broad-except
        errors.append(f"{loader.__class__.__name__}: {e}")
    raise ValueError("No loader could load file. " + "; ".join(errors))
