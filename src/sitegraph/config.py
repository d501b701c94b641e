"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    root_dir:        str = Field(default=".",                description="Project root; identifiers are relative to it")
    data_dir:        str = Field(default="content/data",     description="Data root, relative to root_dir")
    pages_dir:       str = Field(default="content/pages",    description="Pages root, relative to root_dir")
    models_dir:      str = Field(default=".stackbit/models", description="Content-model YAML files, relative to root_dir")
    config_model:    str = Field(default="Config",           description="Type name of the site configuration object")
    dev_mode:        bool = Field(default=False, description="Attach editor annotation marks")
    log_annotations: bool = Field(default=False, description="Log every annotation mark and missing object id")
    output_file:     str = Field(default="content.json",     description="JSON file written by the build command")

    @property
    def root(self) -> Path:
        return Path(self.root_dir)


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then SITEGRAPH_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"SITEGRAPH_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
