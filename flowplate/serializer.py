"""A simple JSON serializer for association values."""

import enum
import inspect
import math
import sys
from typing import Any, Dict, List, Optional, Union, cast

if sys.version_info >= (3, 10):
  from typing import TypeAlias
else:
  from typing_extensions import TypeAlias

JSON: TypeAlias = Union[Dict[str, "JSON"], List["JSON"], str, int, float, bool, None]


def get_flowplate_class_from_string(klass_type: object) -> Optional[type]:
  """ The association value class named `klass_type`, or None if there is no such class. """
  import flowplate.associations.values as values_module

  for name, obj in inspect.getmembers(values_module, inspect.isclass):
    if name == klass_type and obj.__module__ == values_module.__name__:
      return obj
  return None


def serialize(obj: Any) -> JSON:
  """Serialize an object."""

  if isinstance(obj, (int, float, str, bool, type(None))):
    # infinities and NaNs are not valid JSON, so we convert them to strings
    if isinstance(obj, float) and not math.isfinite(obj):
      return "nan" if math.isnan(obj) else ("Infinity" if obj > 0 else "-Infinity")
    return obj
  if isinstance(obj, (list, tuple)):
    return [serialize(item) for item in obj]
  if isinstance(obj, dict):
    return {str(k): serialize(v) for k, v in obj.items()}
  if isinstance(obj, enum.Enum):
    return obj.name
  if hasattr(obj, "serialize"):  # if the object has a custom serialize method
    return cast(JSON, obj.serialize())
  raise TypeError(f"Cannot serialize {obj} of type {type(obj)}")


def deserialize(data: JSON) -> Any:
  """Deserialize an object."""

  if isinstance(data, (int, float, str, bool, type(None))):
    return data
  if isinstance(data, list):
    return [deserialize(item) for item in data]
  if isinstance(data, dict):
    klass = get_flowplate_class_from_string(data.get("type"))
    if klass is not None:  # deserialize a value class, plain dicts may use "type" too
      data = data.copy()
      data.pop("type")
      params = {k: deserialize(v) for k, v in data.items()}
      return klass(**params)
    return {k: deserialize(v) for k, v in data.items()}
  raise TypeError(f"Cannot deserialize {data} of type {type(data)}")
