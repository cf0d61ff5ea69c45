# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for taskenv.

This module collects the foundational pieces used across the taskenv codebase:
configuration, error types, structured logging, context constants, the macro
template engine, and conversion helpers for durations and timestamps.
"""
