# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the taskenv command-line tool.

This package computes the runtime configuration of job instances in a data
pipeline: the data window of an instance, and the environment variables and
rendered files its task or hooks receive. It defines the project, job and
instance specifications, the macro template engine, the window resolver,
and the generator combining them. All taskenv CLI commands ultimately
delegate to the functionality implemented here.
"""

from .taskenv import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "core",
    "generate",
    "properties",
    "specs",
    "window",
]
