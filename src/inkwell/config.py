"""Unified configuration loaded from .inkwell.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from inkwell.content.dataset import DEFAULT_DATASET
from inkwell.content.models import ViewMode
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".inkwell.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG = Path.home() / ".config" / "inkwell" / "config.toml"


class DataConfig(BaseModel):
    """[data] section."""

    dataset: str = DEFAULT_DATASET
    state_dir: str = "."


class SearchConfig(BaseModel):
    """[search] section."""

    debounce_ms: int = Field(default=300, ge=0)

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


class DisplayConfig(BaseModel):
    """[display] section."""

    default_view: ViewMode = ViewMode.BOTH


class InkwellConfig(BaseModel):
    """Top-level configuration."""

    data: DataConfig = Field(default_factory=DataConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)


def load_config(path: str | Path | None = None) -> InkwellConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .inkwell.toml in CWD
    3. ~/.config/inkwell/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged InkwellConfig.
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
        if not data and GLOBAL_CONFIG.exists():
            data = _load_toml(GLOBAL_CONFIG)
            logger.info("Loaded config from %s", GLOBAL_CONFIG)

    config = InkwellConfig.model_validate(data) if data else InkwellConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: InkwellConfig, **cli_kwargs: object) -> InkwellConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "dataset": ("data", "dataset"),
        "state_dir": ("data", "state_dir"),
        "debounce_ms": ("search", "debounce_ms"),
        "default_view": ("display", "default_view"),
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
        "INKWELL_DATASET": ("data", "dataset"),
        "INKWELL_STATE_DIR": ("data", "state_dir"),
        "INKWELL_DEFAULT_VIEW": ("display", "default_view"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    debounce_raw = os.environ.get("INKWELL_DEBOUNCE_MS")
    if debounce_raw is not None:
        try:
            debounce_ms = int(debounce_raw)
        except ValueError:
            debounce_ms = -1
        if debounce_ms >= 0:
            data["search"]["debounce_ms"] = debounce_ms
        else:
            logger.warning("Ignoring invalid INKWELL_DEBOUNCE_MS=%r", debounce_raw)

    return InkwellConfig.model_validate(data)
