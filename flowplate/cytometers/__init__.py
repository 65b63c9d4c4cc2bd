from .errors import CytometerInputError
from .cytometer import FACS_IMAGE_PATH, BDAccuri, BDAriaIII, Cytometer, Settings, SonySH800S
from .instructions import STEP_KINDS, InstructionBackend, InstructionChatterboxBackend, RunStep
from .configs import (
  CalibrationConfig,
  CleanConfig,
  OrchestratorConfig,
  RunConfig,
  TemplateConfig,
  UploadConfig,
)
from .records import Collection, Item
from .orchestrator import RunOrchestrator
