# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for taskenv.

This module defines dataclasses representing the configurable aspects of taskenv:
environment variables, spec file names, presentation settings, date formats
and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.

Names visible to user templates (`GLOBAL__`, `TASK__`, `DSTART`, ...) are not
part of this configuration; see `taskenv_lib.core.constants`.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by taskenv."""

    # Enables taskenv debug mode.
    debug_mode: str = "TASKENV_DEBUG"
    # Explicit path to the taskenv config file.
    config: str = "TASKENV_CONFIG"


@dataclass
class SpecFiles:
    """Names of the files describing projects and jobs."""

    # Name of the job specification file inside a job directory.
    job: str = "job.yaml"
    # Default name of the project specification file.
    project: str = "project.yaml"
    # Name of the directory with job assets, relative to the job file.
    assets_dir: str = "assets"


@dataclass
class PanelSettings:
    """Settings for creating a panel."""

    # Maximal width of the panel.
    max_width: int | None = None
    # Minimal width of the panel.
    min_width: int | None = 60
    # Style of the border lines.
    border_style: str = "white"
    # Style of the title.
    title_style: str = "white bold"
    # Style of the separators between individual sections of the panel.
    rule_style: str = "white"


@dataclass
class PresenterSettings:
    """Settings for the window and generate presenters."""

    # Settings for the window panel.
    window_panel: PanelSettings = field(default_factory=PanelSettings)

    # Settings for the generated configuration panel.
    generate_panel: PanelSettings = field(
        default_factory=lambda: PanelSettings(min_width=80)
    )

    # Style used for keys.
    key_style: str = "default bold"
    # Style used for values.
    value_style: str = "white"
    # Style used for notes.
    notes_style: str = "grey50"
    # Maximal number of asset lines shown before truncation.
    max_asset_lines: int = 20


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used in logs and panels.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of taskenv commands.
    default: int = 91
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for taskenv."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    spec_files: SpecFiles = field(default_factory=SpecFiles)
    presenter: PresenterSettings = field(default_factory=PresenterSettings)
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    # Name of the taskenv binary.
    binary_name: str = "taskenv"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read taskenv config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path)
            if (env_path := os.getenv(EnvironmentVariables.config))
            else None,
            # 2. Current working directory
            Path.cwd() / "taskenv_config.toml",
            # 3. XDG config home
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "taskenv"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Nested dataclasses are converted as well; unknown keys are ignored.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for taskenv.
CFG = Config.load()
