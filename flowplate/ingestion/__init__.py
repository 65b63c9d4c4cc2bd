from .backend import ListingRequest, UploadListingBackend
from .chatterbox import ListingChatterboxBackend
from .directory import DirectoryListingBackend
from .errors import UnclassifiedUploadError
from .classification import PREFIX_LENGTH, Classification, classify_uploads, well_label_of
from .engine import IngestionAttempt, IngestionResult, IngestionState, UploadIngestionEngine
from .associate import (
  KEY_BEAD,
  KEY_SAMPLE,
  associate_upload_to_item,
  associate_uploads,
  associate_uploads_to_plate,
  plural_key,
)
