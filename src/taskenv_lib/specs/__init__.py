# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Specifications of projects, jobs and job instances.

These are the immutable inputs of taskenv. Projects and jobs are loaded
from YAML files; instances are built by the caller for a scheduled time.
"""

from .instance import InstanceSpec, InstanceSpecData
from .job import (
    DependencyType,
    JobAssets,
    JobSpec,
    JobSpecAsset,
    JobSpecBehavior,
    JobSpecConfigItem,
    JobSpecDependency,
    JobSpecHook,
    JobSpecSchedule,
    JobSpecTask,
)
from .project import ProjectSecret, ProjectSpec
from .unit import Unit, UnitInterface

__all__ = [
    "DependencyType",
    "InstanceSpec",
    "InstanceSpecData",
    "JobAssets",
    "JobSpec",
    "JobSpecAsset",
    "JobSpecBehavior",
    "JobSpecConfigItem",
    "JobSpecDependency",
    "JobSpecHook",
    "JobSpecSchedule",
    "JobSpecTask",
    "ProjectSecret",
    "ProjectSpec",
    "Unit",
    "UnitInterface",
]
