# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Generation of the runtime configuration of a job instance.

The `Generator` resolves the configuration of a job's task (or one of its
hooks) for a single instance and renders the job's assets. Values are
resolved in layers, each layer seeing everything resolved before it:

1. environment data of the instance (EXECUTION_TIME, DSTART, DEND, ...),
2. project configuration under the `GLOBAL__` prefix (literal values),
3. task configuration, in declaration order, under both its bare name
   and the `TASK__` prefix,
4. hook configuration, in declaration order (only when generating for a hook).

Assets are rendered against the context as it stood after the task layer,
so a hook receives the same files as its task.

Generation is a pure function of its inputs: it reads no clock and
performs no I/O, and any error aborts it without returning partial results.
"""

from taskenv_lib.core.constants import GLOBAL_PREFIX, TASK_PREFIX
from taskenv_lib.core.logger import get_logger
from taskenv_lib.core.template import render
from taskenv_lib.properties.instance_type import InstanceDataType, InstanceType
from taskenv_lib.specs.instance import InstanceSpec
from taskenv_lib.specs.job import JobSpec, JobSpecConfigItem
from taskenv_lib.specs.project import ProjectSpec

logger = get_logger(__name__)


class Generator:
    """
    Computes environment variables and file contents for a job instance.
    """

    def __init__(self, project: ProjectSpec, job: JobSpec, instance: InstanceSpec):
        """
        Initialize the generator.

        Args:
            project (ProjectSpec): Project the job belongs to.
            job (JobSpec): The job being run.
            instance (InstanceSpec): The instance of the job, carrying its precomputed data.
        """
        self._project = project
        self._job = job
        self._instance = instance

    def generate(
        self, instance_type: InstanceType, unit_name: str
    ) -> tuple[dict[str, str], dict[str, str]]:
        """
        Generate the runtime configuration of the task or one of the hooks.

        Args:
            instance_type (InstanceType): Whether to generate for the main task or a hook.
            unit_name (str): Name of the execution unit or hook unit.

        Returns:
            tuple[dict[str, str], dict[str, str]]: Environment variables and
            file contents (keyed by asset name).

        Raises:
            UnitNotFoundError: If generating for a hook the job does not define exactly once.
            UndefinedVariableError: If a template references an unresolved key.
            TemplateSyntaxError: If a template is malformed.
        """
        logger.debug(
            f"Generating configuration of {instance_type} '{unit_name}' for job '{self._job.name}'."
        )

        # fail before resolving anything if the hook does not exist
        hook = (
            self._job.getHookByName(unit_name)
            if instance_type == InstanceType.HOOK
            else None
        )

        if (
            instance_type == InstanceType.TRANSFORMATION
            and unit_name != self._job.task.unit.getName()
        ):
            logger.debug(
                f"Requested unit '{unit_name}' differs from the task unit '{self._job.task.unit.getName()}'."
            )

        context: dict[str, str] = {}
        env_map: dict[str, str] = {}

        # instance data and globals
        for entry in self._instance.data:
            if entry.type == InstanceDataType.ENV:
                context[entry.name] = entry.value
                env_map[entry.name] = entry.value

        for key in sorted(self._project.config):
            context[f"{GLOBAL_PREFIX}{key}"] = self._project.config[key]
            env_map[f"{GLOBAL_PREFIX}{key}"] = self._project.config[key]

        # task layer
        task_values = self._compileConfigs(
            self._job.task.config,
            context,
            f"task '{self._job.task.unit.getName()}' of job '{self._job.name}'",
            alias_prefix=TASK_PREFIX,
        )
        asset_context = dict(context)

        if hook is None:
            env_map.update(task_values)
        else:
            env_map.update({f"{TASK_PREFIX}{k}": v for k, v in task_values.items()})

            # hook layer
            hook_values = self._compileConfigs(
                hook.config,
                context,
                f"hook '{hook.unit.getName()}' of job '{self._job.name}'",
            )
            env_map.update(hook_values)

        file_map = self._compileAssets(asset_context)

        logger.debug(
            f"Generated {len(env_map)} environment variable(s) and {len(file_map)} file(s)."
        )
        return env_map, file_map

    def _compileConfigs(
        self,
        configs: tuple[JobSpecConfigItem, ...],
        context: dict[str, str],
        owner: str,
        alias_prefix: str | None = None,
    ) -> dict[str, str]:
        """
        Resolve configuration entries in declaration order.

        Each resolved value is stored into `context` (under its bare name and,
        if `alias_prefix` is given, also under the prefixed name) before the
        next entry is rendered.

        Returns:
            dict[str, str]: Resolved values keyed by their bare names.
        """
        resolved: dict[str, str] = {}
        for item in configs:
            value = render(item.value, context, f"config '{item.name}' of {owner}")

            context[item.name] = value
            if alias_prefix:
                context[f"{alias_prefix}{item.name}"] = value
            resolved[item.name] = value

        return resolved

    def _compileAssets(self, context: dict[str, str]) -> dict[str, str]:
        """Render every asset of the job against the context."""
        return {
            asset.name: render(
                asset.value, context, f"asset '{asset.name}' of job '{self._job.name}'"
            )
            for asset in self._job.assets
        }
