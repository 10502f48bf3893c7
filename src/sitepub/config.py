"""Build configuration: settings schema and environment/CLI loader"""

import os
from typing import Any

from pydantic import BaseModel, Field


ENV_PREFIX = "SITEPUB_"


class Settings(BaseModel):
    app_name:       str = "sitepub"
    content_dir:    str = Field(default="content",     description="Root of the markdown content tree")
    output_dir:     str = Field(default="public",      description="Directory for rendered HTML, tag pages and feed")
    templates_dir:  str = Field(default="templates",   description="Site templates; override the packaged defaults")
    static_dir:     str = Field(default="static",      description="Files copied verbatim into output_dir")
    config_file:    str = Field(default="config.toml", description="Site configuration (TOML)")
    posts_section:  str = Field(default="posts",       description="Top-level section whose pages are articles")
    github_api_url: str = Field(default="https://api.github.com", description="Repository metadata API root")
    fetch_timeout:  float = Field(default=10.0, gt=0,  description="Seconds before a metadata request is abandoned")
    include_drafts: bool = Field(default=False,        description="Render pages marked draft = true")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from defaults, then SITEPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid settings: {e}") from e
