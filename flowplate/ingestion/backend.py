from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import List

from flowplate.associations.values import Upload


@dataclass(frozen=True)
class ListingRequest:
  """ One request to the operator for the exported data files.

  Attributes:
    directory: Where the operator should pick the files from, e.g. "Desktop/FCS Exports/run_1".
    attempt: The attempt number, counted from 1.
    expected_count: How many files are expected.
    previous_incomplete: Whether the previous attempt returned too few files. Backends should
      warn the operator when this is set.
  """

  directory: str
  attempt: int
  expected_count: int
  previous_incomplete: bool = False


class UploadListingBackend(metaclass=ABCMeta):
  """ Abstract class for whatever collects exported files from the operator.

  In production this is the host's user interface: the operator selects the exported files and
  the host uploads them. The engine waits for :meth:`request_listing` to return, for as long as it
  takes.
  """

  @abstractmethod
  async def request_listing(self, request: ListingRequest) -> List[Upload]:
    """ Ask for the files in `request.directory` and return the uploads, in upload order. """
