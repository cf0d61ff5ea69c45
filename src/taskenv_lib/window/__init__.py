# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Preview of job data windows.

This module provides the `WindowPresenter` class, which resolves the window
of a job for a scheduled time and formats the policy and its bounds as a
Rich panel or as YAML.
"""

from .presenter import WindowPresenter

__all__ = ["WindowPresenter"]
