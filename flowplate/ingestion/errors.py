from typing import List

from flowplate.associations.values import Upload


class UnclassifiedUploadError(Exception):
  """ Raised when an uploaded file cannot be placed in a well and the policy is "raise".

  A file cannot be placed when its name does not start with a label of the plate, or when another
  file already took its well.
  """

  def __init__(self, message: str, uploads: List[Upload]):
    super().__init__(message)
    self.uploads = uploads
