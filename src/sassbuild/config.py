"""Configuration management for sassbuild."""

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .core.exceptions import ConfigError
from .core.staleness import DirectoryPair, pairs_from_mapping

STYLES = ("expanded", "compressed")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class BuildConfig:
    """Configuration of template locations and the Sass compiler."""

    template_locations: dict[Path, Path]
    build_directory: Path | None = None
    skip: bool = False
    sass_executable: str = "sass"
    style: str = "expanded"
    source_map: bool = True
    load_paths: list[Path] = field(default_factory=list)
    quiet: bool = False
    max_workers: int | None = None

    def __post_init__(self):
        if not self.template_locations:
            raise ConfigError("At least one template location (source = target) is required")
        if self.style not in STYLES:
            raise ConfigError(f"Unknown output style {self.style!r}, expected one of: {', '.join(STYLES)}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigError(f"max_workers must be at least 1, got {self.max_workers}")

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "BuildConfig":
        """
        Create config from dictionary.

        Accepts a bare table, a ``[sassbuild]`` section or a ``[tool.sassbuild]`` section.
        Relative paths are resolved against ``base_dir``.

        :param data: Parsed TOML data
        :param base_dir: Directory relative paths are resolved against
        :return: BuildConfig instance
        :raises ConfigError: If the data is invalid
        """
        if "tool" in data and "sassbuild" in data["tool"]:
            data = data["tool"]["sassbuild"]
        elif "sassbuild" in data:
            data = data["sassbuild"]

        base_dir = base_dir or Path.cwd()

        def resolve(p: str) -> Path:
            path = Path(p).expanduser()
            return path if path.is_absolute() else base_dir / path

        locations = data.get("template_locations", {})
        if not isinstance(locations, dict):
            raise ConfigError("template_locations must be a table of source = target entries")

        build_directory = data.get("build_directory")
        max_workers = data.get("max_workers")

        return cls(
            template_locations={resolve(src): resolve(dst) for src, dst in locations.items()},
            build_directory=resolve(build_directory) if build_directory else None,
            skip=bool(data.get("skip", False)),
            sass_executable=data.get("sass_executable", "sass"),
            style=data.get("style", "expanded"),
            source_map=bool(data.get("source_map", True)),
            load_paths=[resolve(p) for p in data.get("load_paths", [])],
            quiet=bool(data.get("quiet", False)),
            max_workers=int(max_workers) if max_workers is not None else None,
        )

    @classmethod
    def from_file(cls, config_path: Path) -> "BuildConfig":
        """
        Load configuration from TOML file.

        :param config_path: Path to TOML configuration file
        :return: BuildConfig instance
        :raises ConfigError: If file doesn't exist or has invalid format
        """
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'rb') as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse TOML configuration file {config_path}: {e}")

        return cls.from_dict(data, base_dir=config_path.resolve().parent)

    def apply_env(self) -> "BuildConfig":
        """Return a copy with overrides from ``SASSBUILD_*`` environment variables."""
        overrides: dict[str, Any] = {}
        if "SASSBUILD_SKIP" in os.environ:
            overrides["skip"] = _parse_bool(os.environ["SASSBUILD_SKIP"])
        if os.getenv("SASSBUILD_SASS"):
            overrides["sass_executable"] = os.environ["SASSBUILD_SASS"]
        if os.getenv("SASSBUILD_STYLE"):
            overrides["style"] = os.environ["SASSBUILD_STYLE"]
        return replace(self, **overrides) if overrides else self

    def pairs(self) -> list[DirectoryPair]:
        """Template locations as ordered (source, target) pairs."""
        return pairs_from_mapping(self.template_locations)


class ConfigManager:
    """Manages configuration loading."""

    DEFAULT_CONFIG_PATH = Path("sassbuild.toml")
    DEFAULT_FALLBACK_CONFIG_PATH = Path("pyproject.toml")

    @classmethod
    def load_config(cls, config_path: Path | None = None) -> BuildConfig:
        """
        Load configuration from various sources.

        Priority order:
        1. Provided config_path
        2. ``sassbuild.toml`` in the working directory
        3. ``[tool.sassbuild]`` in ``pyproject.toml``

        Environment overrides are applied on top.

        :param config_path: Optional path to config file
        :return: BuildConfig instance
        :raises ConfigError: If no valid configuration found
        """
        if config_path is not None:
            return BuildConfig.from_file(config_path).apply_env()

        if cls.DEFAULT_CONFIG_PATH.exists():
            return BuildConfig.from_file(cls.DEFAULT_CONFIG_PATH).apply_env()

        if cls.DEFAULT_FALLBACK_CONFIG_PATH.exists():
            with open(cls.DEFAULT_FALLBACK_CONFIG_PATH, 'rb') as f:
                try:
                    data = tomllib.load(f)
                except tomllib.TOMLDecodeError as e:
                    raise ConfigError(f"Failed to parse {cls.DEFAULT_FALLBACK_CONFIG_PATH}: {e}")
            if "sassbuild" in data.get("tool", {}):
                base_dir = cls.DEFAULT_FALLBACK_CONFIG_PATH.resolve().parent
                return BuildConfig.from_dict(data, base_dir=base_dir).apply_env()

        raise ConfigError(
            f"No configuration file found. Tried:\n"
            f"  - {cls.DEFAULT_CONFIG_PATH} (default)\n"
            f"  - {cls.DEFAULT_FALLBACK_CONFIG_PATH} [tool.sassbuild] (fallback)\n"
        )
