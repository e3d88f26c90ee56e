"""Unified configuration loaded from .inkwell.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".inkwell.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
    Path.home() / ".config" / "inkwell",
]


class SiteConfig(BaseModel):
    """[site] section: identity used in page metadata."""

    name: str = "My Website"
    url: str = "http://localhost:3000"
    description: str = "Articles and projects."
    image: str = "/thumbnail.png"
    icons: str = "/favicon.ico"
    twitter_creator: str = ""
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value!r}") from exc
        return value

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class ContentSectionConfig(BaseModel):
    """[content] section."""

    directory: str = "./content"
    backend: str = "markdown"


class BuildConfig(BaseModel):
    """[build] section."""

    output_directory: str = "./out"


class ServerConfig(BaseModel):
    """[server] section."""

    host: str = "127.0.0.1"
    port: int = 8000


class InkwellConfig(BaseModel):
    """Top-level configuration model."""

    site: SiteConfig = Field(default_factory=SiteConfig)
    content: ContentSectionConfig = Field(default_factory=ContentSectionConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def load_config(path: str | Path | None = None) -> InkwellConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .inkwell.toml in CWD
    3. ~/.config/inkwell/.inkwell.toml, then ~/.config/inkwell/config.toml

    Then overlay environment variables.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        global_config = Path.home() / ".config" / "inkwell" / "config.toml"
        if not data and global_config.exists():
            data = _load_toml(global_config)
            logger.info("Loaded config from %s", global_config)

    config = InkwellConfig.model_validate(data) if data else InkwellConfig()
    return _apply_env_vars(config)


def merge_cli_overrides(config: InkwellConfig, **cli_kwargs: object) -> InkwellConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was provided (not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "content_dir": ("content", "directory"),
        "backend": ("content", "backend"),
        "output_directory": ("build", "output_directory"),
        "timezone": ("site", "timezone"),
        "host": ("server", "host"),
        "port": ("server", "port"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = str(value) if isinstance(value, Path) else value

    return InkwellConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: InkwellConfig) -> InkwellConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "INKWELL_CONTENT_DIR": ("content", "directory"),
        "INKWELL_CONTENT_BACKEND": ("content", "backend"),
        "INKWELL_OUTPUT_DIR": ("build", "output_directory"),
        "INKWELL_SITE_URL": ("site", "url"),
        "INKWELL_SITE_NAME": ("site", "name"),
        "INKWELL_TIMEZONE": ("site", "timezone"),
        "INKWELL_HOST": ("server", "host"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    port_raw = os.environ.get("INKWELL_PORT")
    if port_raw is not None:
        data["server"]["port"] = int(port_raw)

    return InkwellConfig.model_validate(data)
