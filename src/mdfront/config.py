"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDFRONT_"


class Settings(BaseModel):
    app_name:       str  = "mdfront"
    db_url:         str  = "sqlite:///mdfront.db"
    content_dir:    str  = Field(default="content",  description="Directory scanned when no path is given")
    parser_config:  str  = Field(default="gfm-like", description="MarkdownIt preset used for HTML rendering")
    include_drafts: bool = Field(default=False,      description="List and ingest documents with draft: true")
    strict:         bool = Field(default=True,       description="Abort on the first invalid document; false skips it")
    log_level:      str  = Field(default="WARNING",  pattern="(?i)^(debug|info|warning|error|critical)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDFRONT_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
