import logging
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

logger = logging.getLogger(__name__)

STEP_KINDS = ("check", "note", "template", "load", "settings", "start", "input", "select")


@dataclass(frozen=True)
class RunStep:
  """ One step shown to the operator.

  Attributes:
    title: A short title.
    kind: What the step asks for, one of :data:`STEP_KINDS`. Steps of kind "input" and "select"
      expect a response.
    data: The structured content of the step, e.g. the positions to check.
  """

  title: str
  kind: str
  data: Dict[str, Any] = field(default_factory=dict)

  def __post_init__(self):
    if self.kind not in STEP_KINDS:
      raise ValueError(f"Unknown step kind '{self.kind}', expected one of {STEP_KINDS}")


class InstructionBackend(object, metaclass=ABCMeta):
  """ Shows steps to the operator, on the host platform or elsewhere. """

  @abstractmethod
  async def show(self, step: RunStep) -> Dict[str, Any]:
    """ Show a step and wait until the operator is done with it.

    Returns:
      The operator's responses by variable name. Empty for steps that do not ask for anything.
    """


class InstructionChatterboxBackend(InstructionBackend):
  """ Prints steps instead of showing them, and answers with preset responses.

  Responses are handed out in order to the steps that expect one (kinds "input" and "select").
  Once they run out, those steps get an empty response.
  """

  def __init__(self, responses: Sequence[Dict[str, Any]] = (), verbose: bool = True):
    self.responses = [dict(r) for r in responses]
    self.verbose = verbose
    self.steps: List[RunStep] = []
    self._num_answered = 0

  async def show(self, step: RunStep) -> Dict[str, Any]:
    self.steps.append(step)
    if self.verbose:
      print(f"[{step.kind}] {step.title}")
      for key, value in step.data.items():
        print(f"  {key}: {value}")

    if step.kind not in ("input", "select"):
      return {}
    if self._num_answered >= len(self.responses):
      logger.warning("No response left for step '%s'", step.title)
      return {}
    response = self.responses[self._num_answered]
    self._num_answered += 1
    return dict(response)

  def steps_of_kind(self, kind: str) -> List[RunStep]:
    return [step for step in self.steps if step.kind == kind]
