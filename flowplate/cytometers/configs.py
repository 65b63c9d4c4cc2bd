""" Defaults of the cytometer operations. Override single fields per call with keyword arguments. """

import datetime
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class CleanConfig:
  template_file: str = "CleanRegular.c6t"
  container: str = "24 tube rack"
  labels: List[str] = field(default_factory=lambda: ["C", "D", "S"])
  positions: List[str] = field(default_factory=lambda: ["D4", "D5", "D6"])
  jar_labels: List[str] = field(default_factory=lambda: ["Cleaning", "Decontamination", "Sheath"])
  min_volume: float = 0.5  # mL
  add_volume: float = 1  # mL


@dataclass(frozen=True)
class CalibrationConfig:
  container: str = "24 tube rack"
  template_file: str = "calibration_beads_template.c6t"
  positions: List[str] = field(default_factory=lambda: ["A1"])
  bead_volume: str = "1 drop"
  media_volume: str = "1 mL"
  media: str = "PBS"
  reuse_beads: bool = False


@dataclass(frozen=True)
class RunConfig:
  """ `unclassified_policy` is the configured policy if None, see
  :func:`~flowplate.ingestion.classify_uploads`. """

  templates: Dict[str, str] = field(
    default_factory=lambda: {"E coli": "Ecoli.c6t", "Yeast": "Yeast_gates.c6t"})
  container: str = "96 well plate: Flat Bottom (Black)"
  unclassified_policy: Optional[str] = None


@dataclass(frozen=True)
class TemplateConfig:
  """ `date` is the date in the workspace filename, today if None. """

  item_number: Optional[int] = None
  date: Optional[datetime.date] = None


@dataclass(frozen=True)
class UploadConfig:
  expected_num_uploads: int = 1


@dataclass(frozen=True)
class OrchestratorConfig:
  clean: CleanConfig = field(default_factory=CleanConfig)
  calibration: CalibrationConfig = field(default_factory=CalibrationConfig)
  run: RunConfig = field(default_factory=RunConfig)
  template: TemplateConfig = field(default_factory=TemplateConfig)
  upload: UploadConfig = field(default_factory=UploadConfig)
