""" Attaching uploads to the entities they were produced for. """

import logging
from typing import Optional, Sequence, Tuple

from flowplate import get_config
from flowplate.associations import AssociationStore, Upload
from flowplate.ingestion.classification import Classification, classify_uploads

logger = logging.getLogger(__name__)

KEY_SAMPLE = "SAMPLE_UPLOAD"
KEY_BEAD = "BEAD_UPLOAD"


def plural_key(key_name: str) -> str:
  """ e.g. "SAMPLE_UPLOAD" -> "SAMPLE_UPLOADS", the key of a plate's upload matrix. """
  return key_name if key_name.endswith("S") else key_name + "S"


def associate_uploads(
  key_name: str,
  store: Optional[AssociationStore],
  uploads: Sequence[Upload],
) -> None:
  """ Associate every upload individually under `U<upload id>_<key_name>` and save.

  Makes the data of every well easy to find from a plan or operation. Does nothing if `store` is
  None.
  """

  if store is None:
    return
  for upload in uploads:
    store.put(f"U{upload.id}_{key_name}", upload)
  store.save()


def associate_uploads_to_plate(
  key_name: str,
  store: AssociationStore,
  uploads: Sequence[Upload],
  size: int = 96,
  policy: Optional[str] = None,
) -> Tuple[str, Classification]:
  """ Associate a matrix of upload ids, laid out like the plate, under `key_name` and save.

  Existing associations are never overwritten; the matrix goes under `key_name_0`, `key_name_1`,
  ... when `key_name` is taken.

  Args:
    policy: What to do with uploads that cannot be placed, see :func:`classify_uploads`. Defaults
      to the configured `unclassified_policy`. Under "raise" nothing is saved.

  Returns:
    The key the matrix was saved under, and the classification of the uploads.
  """

  if policy is None:
    policy = get_config().ingestion.unclassified_policy
  classification = classify_uploads(uploads, size=size, policy=policy)
  key = store.put_matrix(key_name, classification.grid)
  store.save()
  if not classification.complete:
    logger.warning("%d upload(s) could not be placed on %s: %s", len(classification.unclassified),
                   store.entity, [u.name for u in classification.unclassified])
  return key, classification


def associate_upload_to_item(
  key_name: str,
  store: AssociationStore,
  uploads: Sequence[Upload],
) -> Optional[str]:
  """ Associate the first upload to an item, e.g. the calibration run of a bead sample, and save.

  Returns:
    The key the upload was saved under, or None if there were no uploads.
  """

  if len(uploads) == 0:
    logger.warning("No upload to associate to %s under '%s'", store.entity, key_name)
    return None
  key = store.put(key_name, uploads[0])
  store.save()
  return key
