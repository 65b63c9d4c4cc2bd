from typing import List, Sequence

from flowplate.associations.values import Upload
from flowplate.ingestion.backend import ListingRequest, UploadListingBackend


class ListingChatterboxBackend(UploadListingBackend):
  """ Answers listing requests with pre-supplied listings, printing each request.

  The first request gets the first listing, the second request the second listing, and so on. Once
  the listings run out, the last one is repeated. Nothing is awaited, so tests run without real
  suspension.
  """

  def __init__(self, listings: Sequence[Sequence[Upload]], verbose: bool = True):
    self.listings = [list(listing) for listing in listings]
    self.verbose = verbose
    self.requests: List[ListingRequest] = []

  async def request_listing(self, request: ListingRequest) -> List[Upload]:
    self.requests.append(request)
    if self.verbose:
      if request.previous_incomplete:
        print("Number of uploaded files was incorrect, please try again!")
      print(f"Attempt {request.attempt}: select all {request.expected_count} file(s) in "
            f"directory {request.directory}")
    if len(self.listings) == 0:
      return []
    index = min(len(self.requests), len(self.listings)) - 1
    return list(self.listings[index])
