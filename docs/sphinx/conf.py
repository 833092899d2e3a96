# Copyright 2026 TinyScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for TinyScan documentation."""

project = "TinyScan"
author = "TinyScan Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]

html_theme = "alabaster"
