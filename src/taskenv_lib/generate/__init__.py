# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Generation of instance runtime configuration.

This module defines the `Generator` class, which resolves the layered
configuration of a job's task or hook for one instance and renders the
job's assets, and the `GeneratePresenter` class, which formats the result
as a Rich panel or as YAML.
"""

from .generator import Generator
from .presenter import GeneratePresenter

__all__ = ["Generator", "GeneratePresenter"]
