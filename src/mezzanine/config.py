"""Configuration management for Mezzanine builds."""

import codecs
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from .errors import ConfigurationError


CONFIG_FILE = "mezzanine.yml"
CONFIG_SECTION = "mezzanine"

_PATH_KEYS = ('source_root', 'resource_root', 'output_dir')


@dataclass
class ProcessorConfig:
    """Configuration for one build round."""
    source_root: Path = Path(".")
    resource_root: Path = Path(".")
    output_dir: Path = Path("generated")
    encoding: Optional[str] = None  # Platform default when None
    dry_run: bool = False
    quiet: bool = False

    def __post_init__(self):
        for key in _PATH_KEYS:
            setattr(self, key, Path(getattr(self, key)))
        if self.encoding is not None:
            try:
                codecs.lookup(self.encoding)
            except LookupError:
                raise ConfigurationError(f"Unknown encoding: {self.encoding}")

    def resolved(self, base_dir: Union[str, Path]) -> 'ProcessorConfig':
        """Return a copy with relative roots anchored at base_dir."""
        base_dir = Path(base_dir)
        paths = {key: base_dir / getattr(self, key) for key in _PATH_KEYS}
        return ProcessorConfig(
            encoding=self.encoding,
            dry_run=self.dry_run,
            quiet=self.quiet,
            **paths
        )

    @classmethod
    def from_mezzanine_yml(cls, base_dir: Union[str, Path] = ".", **overrides) -> 'ProcessorConfig':
        """Create configuration from mezzanine.yml with command-line overrides.

        Args:
            base_dir (Union[str, Path]): Directory holding mezzanine.yml; relative roots resolve against it.
            **overrides: Command-line arguments that override config file values.

        Returns:
            ProcessorConfig: Configuration with file values and overrides applied.

        Raises:
            ConfigurationError: If the file is malformed or holds invalid values.
        """
        base_dir = Path(base_dir)
        values = load_config_section(base_dir / CONFIG_FILE)

        # Command-line overrides win when explicitly provided
        for key, value in overrides.items():
            if value is not None:
                values[key] = value

        unknown = sorted(set(values) - set(cls.__dataclass_fields__))
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

        for key in _PATH_KEYS:
            if key in values and not isinstance(values[key], (str, Path)):
                raise ConfigurationError(f"'{key}' must be a path, got {type(values[key]).__name__}")
        if 'encoding' in values and not isinstance(values['encoding'], str):
            raise ConfigurationError(f"'encoding' must be a string, got {type(values['encoding']).__name__}")

        return cls(**values).resolved(base_dir)


def load_config_section(config_path: Path) -> dict:
    """Load the mezzanine section of a config file.

    Args:
        config_path (Path): Path to mezzanine.yml.

    Returns:
        dict: Section values, empty when the file does not exist.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    if not config_path.exists():
        return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping")

    section = data.get(CONFIG_SECTION, {}) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{CONFIG_SECTION}' section in {config_path} must be a mapping")
    return dict(section)
