import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from flowplate import get_config
from flowplate.associations.values import Upload
from flowplate.ingestion.backend import ListingRequest, UploadListingBackend
from flowplate.ingestion.classification import Classification, classify_uploads

logger = logging.getLogger(__name__)


class IngestionState(enum.Enum):
  REQUESTING = "requesting"
  COUNTING = "counting"
  SATISFIED = "satisfied"
  RETRYING = "retrying"
  DONE = "done"
  ABANDONED = "abandoned"


@dataclass(frozen=True)
class IngestionAttempt:
  """ The outcome of one listing request. """

  attempt: int
  count: int
  expected_count: int

  @property
  def satisfied(self) -> bool:
    return self.count >= self.expected_count


@dataclass
class IngestionResult:
  """ What the operator ended up uploading.

  A result in the `ABANDONED` state is not an error: it holds whatever the last attempt produced,
  which is fewer files than expected. Callers should tell the operator and carry on.
  """

  uploads: List[Upload]
  state: IngestionState
  attempts: List[IngestionAttempt]
  expected_count: int
  history: List[IngestionState] = field(default_factory=list)

  @property
  def complete(self) -> bool:
    return self.state == IngestionState.DONE

  @property
  def num_attempts(self) -> int:
    return len(self.attempts)

  def classify(self, size: int = 96, policy: Optional[str] = None) -> Classification:
    """ Place the uploads in the wells of a plate, see :func:`classify_uploads`. """
    if policy is None:
      policy = get_config().ingestion.unclassified_policy
    return classify_uploads(self.uploads, size=size, policy=policy)


class UploadIngestionEngine:
  """ Asks the operator for exported files until enough arrive, a bounded number of times.

  Exporting data from the cytometer software is a manual step that is easy to get slightly wrong,
  so the engine asks again when fewer files than expected come back, with a warning. After
  `max_attempts` tries it gives up and returns what the last attempt produced.

  Examples:
    Gathering the files of a 96 well plate run and placing them in wells:

      >>> engine = UploadIngestionEngine(backend=ListingChatterboxBackend([[...]]))
      >>> result = await engine.gather_uploads("run_2024_01", expected_count=1)
      >>> result.classify(size=96).grid.get("A1")
  """

  def __init__(
    self,
    backend: UploadListingBackend,
    max_attempts: Optional[int] = None,
    export_root: Optional[str] = None,
  ):
    """ Initialize an ingestion engine.

    Args:
      backend: Where listings come from.
      max_attempts: How often to ask before giving up. Defaults to the configured value (3).
      export_root: The directory export directories are in. Defaults to the configured value.
    """

    ingestion_config = get_config().ingestion
    self.backend = backend
    self.max_attempts = max_attempts if max_attempts is not None else ingestion_config.max_attempts
    self.export_root = export_root if export_root is not None else ingestion_config.export_root
    if self.max_attempts < 1:
      raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")

  def location(self, directory: str) -> str:
    if not self.export_root:
      return directory
    return f"{self.export_root.rstrip('/')}/{directory}"

  async def gather_uploads(self, directory: str, expected_count: int = 1) -> IngestionResult:
    """ Request uploads until at least `expected_count` arrive or the attempts run out.

    Args:
      directory: The export directory the operator should take the files from, relative to the
        export root.
      expected_count: The number of files expected, at least 1.

    Returns:
      The uploads of the last attempt, in the `DONE` state if there were enough of them, in the
      `ABANDONED` state otherwise.
    """

    if expected_count < 1:
      raise ValueError(f"expected_count must be at least 1, got {expected_count}")

    history: List[IngestionState] = []
    attempts: List[IngestionAttempt] = []
    uploads: List[Upload] = []
    location = self.location(directory)

    while True:
      history.append(IngestionState.REQUESTING)
      request = ListingRequest(
        directory=location,
        attempt=len(attempts) + 1,
        expected_count=expected_count,
        previous_incomplete=len(attempts) > 0,
      )
      uploads = list(await self.backend.request_listing(request) or [])

      history.append(IngestionState.COUNTING)
      attempt = IngestionAttempt(attempt=request.attempt, count=len(uploads),
                                 expected_count=expected_count)
      attempts.append(attempt)
      logger.info("Upload attempt %d/%d from %s: %d of %d file(s)", attempt.attempt,
                  self.max_attempts, location, attempt.count, expected_count)

      if attempt.satisfied:
        history.extend([IngestionState.SATISFIED, IngestionState.DONE])
        state = IngestionState.DONE
        break
      if attempt.attempt >= self.max_attempts:
        history.append(IngestionState.ABANDONED)
        state = IngestionState.ABANDONED
        logger.warning("Giving up after %d attempts, continuing with %d of %d expected file(s) "
                       "from %s", attempt.attempt, attempt.count, expected_count, location)
        break
      history.append(IngestionState.RETRYING)
      logger.warning("Expected %d file(s) from %s, got %d. Asking again.", expected_count,
                     location, attempt.count)

    return IngestionResult(
      uploads=uploads,
      state=state,
      attempts=attempts,
      expected_count=expected_count,
      history=history,
    )

  async def gather_and_classify(
    self,
    directory: str,
    size: int,
    expected_count: int = 1,
    policy: Optional[str] = None,
  ) -> Tuple[IngestionResult, Classification]:
    """ :meth:`gather_uploads`, then place the uploads in the wells of a `size` well plate. """
    result = await self.gather_uploads(directory, expected_count=expected_count)
    return result, result.classify(size=size, policy=policy)
