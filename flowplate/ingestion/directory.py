import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Union

from flowplate.associations.values import Upload
from flowplate.ingestion.backend import ListingRequest, UploadListingBackend

logger = logging.getLogger(__name__)


class DirectoryListingBackend(UploadListingBackend):
  """ Lists exported files straight from a directory, for setups without a host upload dialog.

  The operator is asked on the terminal to confirm that the export is finished, then the files
  matching `pattern` in `<root>/<request.directory>` are listed in name order. Every file keeps the
  same id for the lifetime of the backend.
  """

  def __init__(self, root: Union[str, Path], pattern: str = "*.fcs", prompt: bool = True):
    self.root = Path(root)
    self.pattern = pattern
    self.prompt = prompt
    self._ids: Dict[Path, int] = {}

  def _id_for(self, path: Path) -> int:
    path = path.resolve()
    if path not in self._ids:
      self._ids[path] = len(self._ids) + 1
    return self._ids[path]

  async def request_listing(self, request: ListingRequest) -> List[Upload]:
    directory = self.root / request.directory
    if self.prompt:
      message = (f"Export {request.expected_count} file(s) to {directory} and press enter "
                 f"(attempt {request.attempt}). ")
      if request.previous_incomplete:
        message = "Number of uploaded files was incorrect, please try again! " + message
      loop = asyncio.get_running_loop()
      await loop.run_in_executor(None, input, message)

    if not directory.is_dir():
      logger.warning("Export directory %s does not exist", directory)
      return []
    paths = sorted(p for p in directory.glob(self.pattern) if p.is_file())
    return [Upload(id=self._id_for(p), name=p.name) for p in paths]
