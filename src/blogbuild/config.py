"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:         str = "blogbuild"
    default_title:    str = Field(default="New Page", description="Page title when no @page line leads the file")
    input_extension:  str = Field(default="txt", description="Extension of source files picked up by build")
    output_extension: str = Field(default="html", description="Extension of rendered pages")
    stylesheet:       str = Field(default="style.css", description="Stylesheet href linked from every page")
    lang:             str = Field(default="en", description="html lang attribute")
    date_format:      str = Field(default="%A, %B %d, %Y", description="strftime pattern for @date")
    publish_policy:   str = Field(default="content", pattern="^(content|exact)$", description="content or exact")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then BLOGBUILD_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"BLOGBUILD_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid settings: {e}") from e
