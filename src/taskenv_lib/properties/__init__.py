# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Properties and structured metadata of job instances.

This module collects the small value types describing an instance: the
window policy and its resolution, the lifecycle state, and the kinds of
execution units and instance data.
"""
