import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

LOG_FROM_STRING = {
  "DEBUG": logging.DEBUG,
  "INFO": logging.INFO,
  "WARNING": logging.WARNING,
  "ERROR": logging.ERROR,
  "CRITICAL": logging.CRITICAL,
}

LOG_TO_STRING = {v: k for k, v in LOG_FROM_STRING.items()}

UNCLASSIFIED_POLICIES = ("collect", "skip", "raise")


@dataclass
class Config:
  """The configuration object for flowplate."""

  @dataclass
  class Logging:
    """The logging configuration."""

    level: int = logging.INFO
    log_dir: Optional[Path] = None

  @dataclass
  class Ingestion:
    """Settings for gathering exported data files from the operator.

    Attributes:
      max_attempts: How often the operator is asked for the files before the engine gives up and
        continues with what it has.
      export_root: The directory, on the acquisition computer, that export directories live in.
      unclassified_policy: What to do with files whose name does not start with a well label. One
        of "collect", "skip" or "raise".
    """

    max_attempts: int = 3
    export_root: str = "Desktop/FCS Exports"
    unclassified_policy: str = "collect"

    def __post_init__(self):
      if self.max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
      if self.unclassified_policy not in UNCLASSIFIED_POLICIES:
        raise ValueError(f"Invalid unclassified_policy '{self.unclassified_policy}', "
                         f"expected one of {UNCLASSIFIED_POLICIES}")

  logging: Logging = field(default_factory=Logging)
  ingestion: Ingestion = field(default_factory=Ingestion)

  @classmethod
  def from_dict(cls, d: dict) -> "Config":
    logging_data = d.get("logging", {})
    ingestion_data = d.get("ingestion", {})
    default_ingestion = cls.Ingestion()
    return cls(
      logging=cls.Logging(
        level=LOG_FROM_STRING[logging_data.get("level", "INFO")],
        log_dir=Path(logging_data["log_dir"]) if logging_data.get("log_dir") else None,
      ),
      ingestion=cls.Ingestion(
        max_attempts=int(ingestion_data.get("max_attempts", default_ingestion.max_attempts)),
        export_root=ingestion_data.get("export_root", default_ingestion.export_root),
        unclassified_policy=ingestion_data.get("unclassified_policy",
                                               default_ingestion.unclassified_policy),
      ),
    )

  @property
  def as_dict(self) -> dict:
    return {
      "logging": {
        "level": LOG_TO_STRING[self.logging.level],
        "log_dir": str(self.logging.log_dir) if self.logging.log_dir is not None else None,
      },
      "ingestion": {
        "max_attempts": self.ingestion.max_attempts,
        "export_root": self.ingestion.export_root,
        "unclassified_policy": self.ingestion.unclassified_policy,
      },
    }
