import dataclasses
import datetime
import logging
import os
from typing import Callable, List, Optional, Tuple

from flowplate.associations import AssociationStore, Upload
from flowplate.cytometers.configs import OrchestratorConfig
from flowplate.cytometers.cytometer import Cytometer, Settings
from flowplate.cytometers.errors import CytometerInputError
from flowplate.cytometers.instructions import InstructionBackend, RunStep
from flowplate.cytometers.records import Collection, Item
from flowplate.grid import LAYOUTS, CoordinateGrid, ShapeError
from flowplate.ingestion import (
  KEY_BEAD,
  KEY_SAMPLE,
  UploadIngestionEngine,
  associate_upload_to_item,
  associate_uploads,
  associate_uploads_to_plate,
  plural_key,
)

logger = logging.getLogger(__name__)

TEMPLATE_EXTENSION = ".c6t"
WORKSPACE_EXTENSION = ".c6"

StoreFactory = Callable[[Item], AssociationStore]


def has_sample(value: int) -> bool:
  return value > 0


class RunOrchestrator:
  """ Walks the operator through cytometer runs and files the exported data.

  The orchestrator shows steps through an :class:`InstructionBackend`, collects the exported files
  with an :class:`UploadIngestionEngine` and records them with
  :class:`~flowplate.associations.AssociationStore` objects.

  Examples:
    Measuring a plate of yeast cultures on the Accuri:

      >>> orchestrator = RunOrchestrator(
      ...   cytometer=BDAccuri(),
      ...   instructions=InstructionChatterboxBackend([{"dirname": "run_1"}]),
      ...   ingestion=UploadIngestionEngine(backend=ListingChatterboxBackend([uploads])))
      >>> await orchestrator.run_sample_96(plate, "Yeast", collection_store=plate_store)
  """

  def __init__(
    self,
    cytometer: Cytometer,
    instructions: InstructionBackend,
    ingestion: UploadIngestionEngine,
    config: Optional[OrchestratorConfig] = None,
  ):
    self.cytometer = cytometer
    self.instructions = instructions
    self.ingestion = ingestion
    self.config = config if config is not None else OrchestratorConfig()

  async def clean(self, **overrides) -> str:
    """ Run the cleaning cycle.

    Args:
      overrides: Fields of :class:`CleanConfig` to override.

    Returns:
      The name of the workspace file.
    """

    config = dataclasses.replace(self.config.clean, **overrides)
    tubes = [
      {
        "label": label,
        "position": position,
        "min_volume_ml": config.min_volume,
        "add_volume_ml": config.add_volume,
        "jar_label": jar_label,
      }
      for label, position, jar_label in zip(config.labels, config.positions, config.jar_labels)
    ]
    await self.instructions.show(RunStep(
      title="Check Levels of Cleaning Reagents",
      kind="check",
      data={"container": config.container, "tubes": tubes},
    ))

    sample_grid = CoordinateGrid.create_empty(24)
    for position in config.positions:
      sample_grid.set(position, 1)

    filename = await self.run_template(
      template_file=config.template_file,
      settings=self.cytometer.clean_settings,
      title=f"Cleaning Template on {self.cytometer.name}",
      container=config.container,
      sample_grid=sample_grid,
    )
    await self.instructions.show(RunStep(
      title="Cleaning",
      kind="note",
      data={"supervision_required": False},
    ))
    return filename

  async def bead_calibration(
    self,
    bead_stock: Item,
    diluted_beads: Item,
    store_factory: Optional[StoreFactory] = None,
    **overrides,
  ) -> List[Upload]:
    """ Run a calibration bead sample from a tube and associate the data to the diluted beads.

    Args:
      bead_stock: The stock of calibration beads.
      diluted_beads: The item of diluted beads that is run, either freshly made from `bead_stock` or
        left over from an earlier calibration of the same lot.
      store_factory: Gives the association store of an item. If None, nothing is associated.
      overrides: Fields of :class:`CalibrationConfig` to override.

    Returns:
      The uploaded files, at most one of which is associated to `diluted_beads` under
      "BEAD_UPLOAD".
    """

    config = dataclasses.replace(self.config.calibration, **overrides)

    leftovers = False
    if config.reuse_beads:
      response = await self.instructions.show(RunStep(
        title="Check for Existing Diluted Beads",
        kind="select",
        data={"lot_no": bead_stock.lot_no, "var": "bead_answer", "options": ["yes", "no"]},
      ))
      leftovers = response.get("bead_answer") == "yes"

    await self.instructions.show(RunStep(
      title="Prepare Calibration sample",
      kind="check",
      data={
        "leftovers": leftovers,
        "source": f"{config.bead_volume} of {bead_stock.sample_name}",
        "destination": f"{config.media_volume} of {config.media}",
        "container": config.container,
        "positions": list(config.positions),
      },
    ))

    sample_grid = CoordinateGrid.create_empty(24)
    sample_grid.set("A1", diluted_beads.sample_id)

    await self.run_template(
      template_file=config.template_file,
      settings=self.cytometer.calibration_settings,
      title=f"Calibration Template on {self.cytometer.name}",
      container=config.container,
      sample_grid=sample_grid,
      item_number=diluted_beads.id,
    )
    uploads = await self.upload_files()

    if store_factory is not None:
      associate_upload_to_item(KEY_BEAD, store_factory(diluted_beads), uploads)
    return uploads

  def _sample_grid_of(self, collection: Optional[Collection]) -> CoordinateGrid:
    if collection is None:
      raise CytometerInputError("collection expected for 96 well plate")
    dimensions = collection.dimensions
    if len(dimensions) == 0:
      raise CytometerInputError("empty dimensions array for 96 well plate")
    if len(dimensions) != 2 or not all(dim > 0 for dim in dimensions):
      raise CytometerInputError("bad dimensions for 96 well plate")
    try:
      sample_grid = CoordinateGrid.from_array(collection.matrix)
    except ShapeError as e:
      raise CytometerInputError(f"bad dimensions for 96 well plate: {e}") from e
    if LAYOUTS.get(sample_grid.size) != sample_grid.shape:
      layouts = ", ".join(f"{r}x{c}" for r, c in LAYOUTS.values())
      raise CytometerInputError(f"unsupported plate layout {sample_grid.num_rows}x"
                                f"{sample_grid.num_columns}, expected one of {layouts}")
    if sample_grid.count(has_sample) < 1:
      raise CytometerInputError("No samples to run")
    return sample_grid

  async def run_sample_96(
    self,
    collection: Optional[Collection],
    sample_string: str,
    plan_store: Optional[AssociationStore] = None,
    operation_store: Optional[AssociationStore] = None,
    collection_store: Optional[AssociationStore] = None,
    **overrides,
  ) -> List[Upload]:
    """ Measure the samples of a plate and associate the data.

    Every upload is associated individually to the plan and the operation, and a matrix of upload
    ids is associated to the plate.

    Args:
      collection: The plate. Positions with a sample id > 0 are measured.
      sample_string: The kind of sample, e.g. "Yeast". Selects the template and settings.
      plan_store: The associations of the plan, or None.
      operation_store: The associations of the operation, or None.
      collection_store: The associations of the plate, or None.
      overrides: Fields of :class:`RunConfig` to override.

    Raises:
      CytometerInputError: If there is no plate, its dimensions are bad or not a supported layout, it
        has no samples or there is no template for `sample_string`. Raised before any step is shown.
      UnclassifiedUploadError: If the policy is "raise" and an upload cannot be placed on the plate.
        Nothing is saved then.
    """

    config = dataclasses.replace(self.config.run, **overrides)
    sample_grid = self._sample_grid_of(collection)
    assert collection is not None
    if sample_string not in config.templates:
      raise CytometerInputError(
        f"No template for '{sample_string}', known are {sorted(config.templates)}")

    await self.run_template(
      template_file=config.templates[sample_string],
      settings=self.cytometer.run_settings.get(sample_string, {}),
      title=f"{sample_string} measurement",
      container=config.container,
      sample_grid=sample_grid,
      item_number=collection.id,
    )
    uploads = await self.upload_files()

    # the plate goes first, under the "raise" policy nothing is saved
    if collection_store is not None:
      associate_uploads_to_plate(plural_key(KEY_SAMPLE), collection_store, uploads,
                                 size=sample_grid.size, policy=config.unclassified_policy)
    associate_uploads(KEY_SAMPLE, plan_store, uploads)
    associate_uploads(KEY_SAMPLE, operation_store, uploads)
    return uploads

  def workspace_filename(
    self,
    template_file: str,
    item_number: Optional[int] = None,
    date: Optional[datetime.date] = None,
  ) -> str:
    """ e.g. "Yeast_gates_1234_2024-01-31.c6" for template "Yeast_gates.c6t" and item 1234. """

    stem = os.path.basename(template_file)
    if stem.endswith(TEMPLATE_EXTENSION):
      stem = stem[:-len(TEMPLATE_EXTENSION)]
    date = date if date is not None else datetime.date.today()
    parts = [stem] + ([str(item_number)] if item_number is not None else []) + [date.isoformat()]
    return "_".join(parts) + WORKSPACE_EXTENSION

  async def run_template(
    self,
    template_file: str,
    settings: Settings,
    title: str,
    container: str,
    sample_grid: Optional[CoordinateGrid],
    **overrides,
  ) -> str:
    """ Walk the operator through setting up a template and starting the run.

    Args:
      template_file: The template, e.g. "Yeast_gates.c6t".
      settings: The acquisition settings to enter.
      title: What is being run, used in step titles.
      container: The plate or rack type.
      sample_grid: Sample ids in occupied positions, -1 elsewhere.
      overrides: Fields of :class:`TemplateConfig` to override.

    Returns:
      The name the workspace is saved under.

    Raises:
      CytometerInputError: If `sample_grid` is None.
    """

    if sample_grid is None:
      raise CytometerInputError("sample_matrix is nil")
    config = dataclasses.replace(self.config.template, **overrides)
    filename = self.workspace_filename(template_file, config.item_number, config.date)
    positions = list(sample_grid.occupied_labels(has_sample))

    steps = [
      RunStep(f"Check new sample {title}", "check", {"positions": positions}),
      RunStep(f"Select {title}", "template", {
        "template_dir": self.cytometer.template_dir,
        "template_file": template_file,
        "container": container,
      }),
      RunStep(f"Load sample {title}", "load", {"container": container}),
      RunStep(f"Settings for {title}", "settings", {"settings": dict(settings)}),
      RunStep(f"Select wells and run {title}", "start", {
        "positions": positions,
        "workspace_file": filename,
      }),
    ]
    for step in steps:
      await self.instructions.show(step)

    logger.info("Running %s on %s with %d position(s), saving workspace as %s", title,
                self.cytometer.name, len(positions), filename)
    return filename

  async def export_and_select_directory(self) -> str:
    """ Ask the operator to export the data and name the export directory. """

    response = await self.instructions.show(RunStep(
      title=f"Select Data Directory for Flow Cytometer {self.cytometer.name}",
      kind="input",
      data={"var": "dirname", "label": self.cytometer.export_directory_prompt},
    ))
    dirname = response.get("dirname")
    if not dirname:
      raise CytometerInputError("No export directory entered")
    return str(dirname)

  async def upload_files(self, **overrides) -> List[Upload]:
    """ Collect the exported files. Fewer files than expected are logged, not raised. """

    config = dataclasses.replace(self.config.upload, **overrides)
    dirname = await self.export_and_select_directory()
    result = await self.ingestion.gather_uploads(dirname,
                                                 expected_count=config.expected_num_uploads)
    if not result.complete:
      logger.warning("Continuing with %d of %d expected upload(s) from %s", len(result.uploads),
                     result.expected_count, dirname)
    return result.uploads

  def target_events(self, default_to_sort: int, frac_positive: float) -> int:
    """ `default_to_sort` scaled by the fraction of positive events, rounded down. """
    return int(default_to_sort * frac_positive)

  def sort_plan(self, tube_ct: int, default_to_sort: int,
                frac_positive: float) -> Tuple[str, int]:
    """ The software tube label and target events of the `tube_ct`-th sort of an experiment. """
    return self.cytometer.tube_label(tube_ct), self.target_events(default_to_sort, frac_positive)
