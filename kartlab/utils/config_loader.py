"""
Configuration loader for the frustration scoring pipeline.

Loads settings from a YAML config file, chosen by explicit path, the
KARTLAB_CONFIG environment variable, or config/default.yaml.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from kartlab.models.scoring import ScoreWeights
from kartlab.utils.config_schema import PipelineConfig, validate_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "default.yaml"


class Config:
    """Validated pipeline configuration with dot-notation access."""

    def __init__(self, config_path: str | Path | None = None):
        self._requested_path = config_path
        self._config: dict[str, Any] | None = None
        self.settings: PipelineConfig | None = None
        self._load()

    def _resolve_path(self) -> tuple[Path, bool]:
        """Return the config path and whether it was explicitly requested."""
        if self._requested_path is not None:
            return Path(self._requested_path), True

        env_path = os.getenv("KARTLAB_CONFIG")
        if env_path:
            return Path(env_path), True

        return DEFAULT_CONFIG_PATH, False

    def _load(self):
        """Load config from YAML file."""
        config_path, explicit = self._resolve_path()

        if config_path.exists():
            with open(config_path) as f:
                raw = yaml.safe_load(f) or {}
            source = str(config_path)
        elif explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        else:
            logger.debug(f"No config at {config_path}, using built-in defaults")
            raw = {}
            source = "built-in defaults"

        if not isinstance(raw, dict):
            raise ValueError(f"Config validation failed: {source} must contain a mapping")

        try:
            self.settings = validate_config(raw)
        except ValidationError as e:
            raise ValueError(f"Config validation failed for {source}:\n{e}") from e

        self._config = self.settings.model_dump()
        logger.debug(f"Configuration loaded from {source}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value using dot notation, returning default if not found."""
        value = self._config

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_section(self, section: str) -> dict:
        """Get entire config section."""
        if self._config is None:
            return {}
        value = self._config.get(section, {})
        return value if isinstance(value, dict) else {}

    def score_weights(self) -> ScoreWeights:
        return ScoreWeights(**self.get_section("scoring")["weights"])

    def reload(self):
        """Force reload config from file."""
        self._config = None
        self._load()


def load_config(config_path: str | Path | None = None) -> Config:
    """Load and validate configuration."""
    return Config(config_path)
