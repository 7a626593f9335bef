"""
Configuration management for genealogy.

Configuration is looked up in this order, first match wins:
- Project: ./genealogy.json in the working directory
- XDG config directory: ~/.config/genealogy/config.json
- Fallback: ~/.genealogy/config.json

Without any file the defaults apply.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, asdict, field, fields

from .weights import Weights

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = "genealogy.json"
OUTPUT_FORMATS = ("json", "yaml")


@dataclass
class FoldersConfig:
    """Folders posts are loaded from."""
    articles: Optional[str] = None
    talks: Optional[str] = None
    videos: Optional[str] = None


@dataclass
class OutputConfig:
    """Where and how recommendations are written."""
    path: Optional[str] = None
    format: str = "json"


@dataclass
class RecommendationConfig:
    """Recommender options."""
    per_post: int = 3
    genealogists: List[str] = field(default_factory=list)


@dataclass
class WeightsConfig:
    """Relation type weights."""
    weights: Dict[str, float] = field(default_factory=dict)
    default: float = 1.0

    def to_weights(self) -> Weights:
        return Weights(self.weights, self.default)


@dataclass
class GenealogyConfig:
    """Main genealogy configuration."""
    folders: FoldersConfig = field(default_factory=FoldersConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    recommendation: RecommendationConfig = field(default_factory=RecommendationConfig)
    weights: WeightsConfig = field(default_factory=WeightsConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "folders": asdict(self.folders),
            "output": asdict(self.output),
            "recommendation": asdict(self.recommendation),
            "weights": asdict(self.weights),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GenealogyConfig':
        """
        Create from dictionary.

        Raises:
            ValueError: On a non-object section, an unknown key or an invalid value
        """
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a JSON object, got {type(data).__name__}")
        unknown = sorted(set(data) - set(SECTIONS))
        if unknown:
            raise ValueError(f"Unknown configuration section(s): {', '.join(unknown)}")

        sections = {name: _section(name, section_class, data.get(name))
                    for name, section_class in SECTIONS.items()}
        config = cls(**sections)
        config.validate()
        return config

    def validate(self) -> None:
        """
        Check values the dataclasses can't.

        Raises:
            ValueError: On a value of the wrong type, an unknown output format
                or a negative per_post
            InvalidWeight: On a weight outside of [0, 1]
        """
        for key in ("articles", "talks", "videos"):
            _check_optional_str(f"folders.{key}", getattr(self.folders, key))
        _check_optional_str("output.path", self.output.path)
        if self.output.format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format '{self.output.format}', expected one of {', '.join(OUTPUT_FORMATS)}"
            )

        per_post = self.recommendation.per_post
        if isinstance(per_post, bool) or not isinstance(per_post, int):
            raise ValueError(f"recommendation.per_post must be an integer, got {per_post!r}")
        if per_post < 0:
            raise ValueError(f"per_post can't be negative: {per_post}")
        genealogists = self.recommendation.genealogists
        if not isinstance(genealogists, list) or not all(isinstance(name, str) for name in genealogists):
            raise ValueError(f"recommendation.genealogists must be a list of names, got {genealogists!r}")

        if not isinstance(self.weights.weights, dict):
            raise ValueError(f"weights.weights must be an object, got {self.weights.weights!r}")
        self.weights.to_weights()


SECTIONS = {
    "folders": FoldersConfig,
    "output": OutputConfig,
    "recommendation": RecommendationConfig,
    "weights": WeightsConfig,
}


def _section(name: str, section_class, values: Any):
    if values is None:
        return section_class()
    if not isinstance(values, dict):
        raise ValueError(f"Configuration section '{name}' must be an object, got {type(values).__name__}")
    known = {f.name for f in fields(section_class)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown key(s) in '{name}': {', '.join(unknown)}")
    return section_class(**values)


def _check_optional_str(key: str, value: Any) -> None:
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {value!r}")


def get_user_config_path() -> Path:
    """
    Get the user configuration file path.

    Follows XDG Base Directory specification:
    1. ~/.config/genealogy/config.json
    2. Fallback: ~/.genealogy/config.json

    Returns:
        Path to config file
    """
    xdg_config_home = Path.home() / ".config"
    if xdg_config_home.exists():
        config_dir = xdg_config_home / "genealogy"
    else:
        config_dir = Path.home() / ".genealogy"

    return config_dir / "config.json"


def get_config_path() -> Path:
    """
    Get the configuration file that applies to the working directory.

    Returns:
        The project file if it exists, otherwise the user file
    """
    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        return project_config
    return get_user_config_path()


def load_config(path: Optional[Path] = None) -> GenealogyConfig:
    """
    Load configuration from file.

    Args:
        path: Explicit config file; looked up when omitted

    Returns:
        GenealogyConfig instance with loaded values or defaults
    """
    config_path = Path(path) if path else get_config_path()

    if not config_path.exists():
        if path:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return GenealogyConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Using default configuration")
        return GenealogyConfig()

    logger.debug(f"Loaded configuration from {config_path}")
    return GenealogyConfig.from_dict(data)


def save_config(config: GenealogyConfig, path: Optional[Path] = None) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save
        path: Target file, the user config file by default

    Returns:
        Path the configuration was written to
    """
    config_path = Path(path) if path else get_user_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path
