"""Configuration management for revfix."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .constants import CONFIG_DIR, CONFIG_FILE, DEFAULT_EXCLUDE_PATTERNS, MIN_SNIPPET_LENGTH
from .errors import ConfigError
from .models import Severity


class ReconcileConfig(BaseModel):
    """Configuration for line reconciliation."""

    min_snippet_length: int = Field(
        default=MIN_SNIPPET_LENGTH,
        ge=0,
        description="Snippets this long or shorter (trimmed) are too ambiguous to search for",
    )


class ApplyConfig(BaseModel):
    """Configuration for fix application."""

    confirm: bool = Field(default=True, description="Ask before applying a single fix")
    encoding: str = Field(default="utf-8", description="Encoding used to read and write files")


class FiltersConfig(BaseModel):
    """Which issues are considered at all."""

    severity_threshold: Severity = Severity.INFO
    exclude_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))


class RevfixConfig(BaseModel):
    """Root configuration for revfix."""

    reconcile: ReconcileConfig = Field(default_factory=ReconcileConfig)
    apply: ApplyConfig = Field(default_factory=ApplyConfig)
    filters: FiltersConfig = Field(default_factory=FiltersConfig)


def get_config_dir(root: Path) -> Path:
    """Path to the .revfix directory of a workspace."""
    return root / CONFIG_DIR


def load_config(root: Path) -> RevfixConfig:
    """Load config from <root>/.revfix/config.toml.

    Args:
        root: Workspace root

    Returns:
        Loaded configuration, or defaults if config.toml doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or has invalid values
    """
    config_path = get_config_dir(root) / CONFIG_FILE
    if not config_path.exists():
        return RevfixConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return RevfixConfig.model_validate(data)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e


def write_config_template(config_dir: Path) -> Path:
    """Write default config.toml template.

    Args:
        config_dir: Path to .revfix directory

    Returns:
        Path to the written config file
    """
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / CONFIG_FILE
    template = {
        "reconcile": {"min_snippet_length": MIN_SNIPPET_LENGTH},
        "apply": {"confirm": True, "encoding": "utf-8"},
        "filters": {
            "severity_threshold": Severity.INFO.value,
            "exclude_patterns": list(DEFAULT_EXCLUDE_PATTERNS),
        },
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
