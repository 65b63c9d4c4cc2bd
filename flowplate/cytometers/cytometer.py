from abc import ABCMeta, abstractmethod
from typing import Dict, Optional

Settings = Dict[str, str]

FACS_IMAGE_PATH = "Actions/FACS"


class Cytometer(object, metaclass=ABCMeta):
  """ The properties of a flow cytometer model that a run needs to know.

  A cytometer is a plain value: create one per process and pass it to a
  :class:`~flowplate.cytometers.RunOrchestrator`. Nothing in the grid, association or ingestion
  layers depends on a specific model.
  """

  template_dir: str = ""
  tube_label_stub: str = "Tube %d"

  @property
  def image_path(self) -> str:
    return FACS_IMAGE_PATH

  @property
  def calibration_settings(self) -> Settings:
    """ Acquisition settings for calibration beads. """
    return {}

  @property
  def clean_settings(self) -> Settings:
    """ Acquisition settings for the cleaning cycle. """
    return {}

  @property
  def run_settings(self) -> Dict[str, Settings]:
    """ Acquisition settings per kind of sample, e.g. "Yeast". """
    return {}

  @property
  def required_sample_tube(self) -> Optional[str]:
    return None

  def tube_label(self, tube_ct: int) -> str:
    """ The label the cytometer software gives to the `tube_ct`-th tube of an experiment. """
    return self.tube_label_stub % tube_ct

  def path_to(self, filename: str, extension: str = "png") -> str:
    return f"{self.image_path}/{filename}.{extension}"

  @property
  def export_directory_prompt(self) -> str:
    return f"Enter the name of the directory the {self.name} exported the FCS files to"

  @property
  @abstractmethod
  def name(self) -> str:
    """ The model name shown to the operator. """

  @property
  def location(self) -> str:
    """ Where the instrument is, if the operator has to go there. """
    return ""

  def __repr__(self) -> str:
    return f"{self.__class__.__name__}()"

  def __eq__(self, other: object) -> bool:
    return type(self) is type(other)

  def __hash__(self) -> int:
    return hash(type(self))


class BDAccuri(Cytometer):
  """ The BD Accuri C6 plate cytometer. """

  name = "BD Accuri"
  template_dir = "aq_templates"

  @property
  def calibration_settings(self) -> Settings:
    return {
      "Run Limits": "30 L",
      "Fluidics": "Slow",
      "Set Threshold": "FSC-H less than 300,000, SSC-H less than 250,000",
      "Wash Settings": "None",
      "Agitate Plate": "None",
    }

  @property
  def clean_settings(self) -> Settings:
    return {
      "Run Limits": "2 Min",
      "Fluidics": "Slow",
      "Set Threshold": "FSC-H less than 80,000",
      "Wash Settings": "None",
      "Agitate Plate": "None",
    }

  @property
  def run_settings(self) -> Dict[str, Settings]:
    return {
      "E coli": {
        "Run Limits": "60,000 events, 1 Min, 50 L",
        "Fluidics": "Medium",
        "Set Threshold": "FSC-H less than 8,000",
        "Wash Settings": "None",
        "Agitate Plate": "1 Cycle every 12th well",
      },
      "Yeast": {
        "Run Limits": "30,000 events",
        "Fluidics": "Fast",
        "Set Threshold": "FSC-H less than 400,000",
        "Wash Settings": "None",
        "Agitate Plate": "1 Cycle every 12th well",
      },
    }

  @property
  def export_directory_prompt(self) -> str:
    return "Enter the name of the export directory in Desktop/FCS Exports/"


class BDAriaIII(Cytometer):
  """ The BD FACSAria III cell sorter. """

  name = "BD Aria III"
  location = "Health Sciences Building room H-581"
  tube_label_stub = "Tube_%03d"

  @property
  def required_sample_tube(self) -> Optional[str]:
    return "5 ml polystyrene round-bottom tube (Falcon 352054)"


class SonySH800S(Cytometer):
  """ The Sony SH800S cell sorter. """

  name = "Sony SH800S"
  location = "NanoES 380B"
  tube_label_stub = "Tube - %d"

  @property
  def image_path(self) -> str:
    return f"{FACS_IMAGE_PATH}/sony_sh800s"
