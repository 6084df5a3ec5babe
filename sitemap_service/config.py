"""
Loading and validation of the SitemapService configuration.
Pydantic describes the schema and checks the values.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CrawlerConfig(BaseModel):
    """Crawl limits, fetch settings and the address of the job-control server."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_links: int = Field(50, ge=1, description="Soft cap on the number of nodes per crawl.")
    max_depth: int = Field(4, ge=1, description="Deepest level whose links are expanded.")
    max_level_size: int = Field(10, ge=1, description="Children accepted per expansion pass.")
    timeout: float = Field(5.0, gt=0, description="Timeout of a single fetch (seconds).")
    user_agent: str = Field("SitemapService/1.0", min_length=1, description="User-Agent header.")
    host: str = Field("127.0.0.1", min_length=1, description="Bind address of the HTTP surface.")
    port: int = Field(8080, ge=1, le=65535, description="Port of the HTTP surface.")

    @field_validator("user_agent", "host", mode="before")
    def _strip(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.

    With ``path=None`` the default file is used when it exists, otherwise
    the built-in defaults. An explicit path that does not exist raises
    FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "load_config"]
