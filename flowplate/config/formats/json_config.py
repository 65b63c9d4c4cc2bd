import json
from typing import IO

from flowplate.config.config import Config
from flowplate.config.formats import ConfigLoader, ConfigSaver


class JsonLoader(ConfigLoader):
  """ Loads a config from JSON with a "logging" and an "ingestion" object. Missing keys take their
  default value. """

  extension = "json"

  def load(self, r: IO) -> Config:
    data = json.load(r)
    if not isinstance(data, dict):
      raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return Config.from_dict(data)


class JsonSaver(ConfigSaver):
  """ Saves a config as an indented JSON object. Unset values are written as null. """

  extension = "json"

  def save(self, w: IO, cfg: Config):
    json.dump(cfg.as_dict, w, indent=2, sort_keys=True)
    w.write("\n")
