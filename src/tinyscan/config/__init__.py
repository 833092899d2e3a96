# Copyright 2026 TinyScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for TinyScan."""

from tinyscan.config.loader import CONFIG_FILE_NAME, ConfigError, ScanConfig, find_config, load_config

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ScanConfig",
    "find_config",
    "load_config",
]
