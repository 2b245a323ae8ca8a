"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:      str = "mdfilter"
    vault_dir:     str = Field(default=".",        description="Root directory of the markdown corpus")
    max_workers:   int = Field(default=8, ge=1,    description="Max documents evaluated concurrently")
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    output_format: str = Field(default="paths", pattern="^(paths|json)$", description="paths or json")
    log_json:      bool = Field(default=False,     description="Emit structured JSON log lines")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDFILTER_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDFILTER_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
