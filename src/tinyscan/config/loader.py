# Copyright 2026 TinyScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the TinyScan configuration file."""

from __future__ import annotations

import codecs
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".tinyscan.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


class ScanConfig(BaseModel):
    """Settings controlling how sources are read and reports are written.

    Attributes:
        report_format: Output format of the ``scan`` command.
        encoding: Text encoding used for source files and written reports.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    report_format: Literal["text", "json"] = Field(alias="report-format", default="text")
    encoding: str = "utf-8"

    @field_validator("encoding")
    @classmethod
    def check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"unknown encoding '{value}'") from None
        return value


def load_config(path: Path) -> ScanConfig:
    """Load and validate a TinyScan configuration file.

    An empty file is treated as a configuration with all defaults.

    Args:
        path: Path to the ``.tinyscan.yaml`` file.

    Returns:
        A validated ScanConfig instance.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


def find_config(directory: Path) -> Path | None:
    """Return the config file in *directory*, or None if there is none."""
    candidate = directory / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


# ################
# Implementation
# ################


def _parse_config(text: str, source_label: str = "<string>") -> ScanConfig:
    """Parse configuration YAML text into a ScanConfig.

    Raises:
        ConfigError: If the YAML is invalid or the values are rejected.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    try:
        return ScanConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {source_label}: {exc}") from exc
