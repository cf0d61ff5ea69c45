# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand
from click_option_group import optgroup
from rich.console import Console

from taskenv_lib.core.common import parse_timestamp
from taskenv_lib.core.config import CFG
from taskenv_lib.core.error import SpecError, TaskEnvError
from taskenv_lib.core.logger import get_logger
from taskenv_lib.properties.instance_type import InstanceType
from taskenv_lib.specs.instance import InstanceSpec
from taskenv_lib.specs.job import JobSpec
from taskenv_lib.specs.project import ProjectSpec

from .generator import Generator
from .presenter import GeneratePresenter

logger = get_logger(__name__)
console = Console()


@click.command(
    short_help="Generate the runtime configuration of a job instance.",
    help=f"""Generate the environment variables and files an instance of a job receives.

{click.style("JOB", fg="green")}   Path to the job directory or to the job specification file.

The configuration is generated for the main task of the job unless `--hook` is specified.
If `--project` is not specified, `{CFG.binary_name} generate` looks for '{CFG.spec_files.project}'
in the job directory and its parents.""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument("job", type=str, metavar=click.style("JOB", fg="green"))
@optgroup.group(f"{click.style('Instance settings', fg='yellow')}")
@optgroup.option(
    "--project",
    "-p",
    type=str,
    default=None,
    help="Path to the project specification file.",
)
@optgroup.option(
    "--scheduled-at",
    "-t",
    type=str,
    required=True,
    help="Scheduled time of the instance as an RFC 3339 timestamp, e.g. '2020-11-11T00:00:00Z'.",
)
@optgroup.option(
    "--execution-time",
    type=str,
    default=None,
    help="Time at which the instance was triggered. Defaults to the current time (UTC).",
)
@optgroup.group(f"{click.style('Output settings', fg='yellow')}")
@optgroup.option(
    "--hook",
    type=str,
    default=None,
    help="Name of the hook to generate the configuration for.",
)
@optgroup.option(
    "--yaml",
    "as_yaml",
    is_flag=True,
    help="Print the configuration as YAML with 'env' and 'files' keys instead of a panel.",
)
def generate(
    job: str,
    project: str | None,
    scheduled_at: str,
    execution_time: str | None,
    hook: str | None,
    as_yaml: bool = False,
) -> NoReturn:
    """
    Generate the runtime configuration of an instance of the specified job.
    """
    try:
        job_spec = JobSpec.fromFile(Path(job))
        project_spec = ProjectSpec.fromFile(
            Path(project) if project else _find_project_file(Path(job))
        )

        scheduled = parse_timestamp(scheduled_at)
        executed = (
            parse_timestamp(execution_time)
            if execution_time
            else datetime.now(timezone.utc).replace(microsecond=0)
        )
        instance = InstanceSpec.fromSchedule(job_spec, scheduled, executed)

        if hook:
            instance_type, unit_name = InstanceType.HOOK, hook
        else:
            instance_type, unit_name = (
                InstanceType.TRANSFORMATION,
                job_spec.task.unit.getName(),
            )

        env_map, file_map = Generator(project_spec, job_spec, instance).generate(
            instance_type, unit_name
        )

        presenter = GeneratePresenter(
            f"JOB: {job_spec.name} | {instance_type}: {unit_name}", env_map, file_map
        )
        if as_yaml:
            click.echo(presenter.toYaml(), nl=False)
        else:
            console.print(presenter.createPanel(console))
        sys.exit(0)
    except TaskEnvError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)


def _find_project_file(job: Path) -> Path:
    """
    Find the project specification file belonging to a job.

    The directory of the job and all its parents are searched, nearest first.

    Raises:
        SpecError: If no project specification file is found.
    """
    start = job.resolve() if job.is_dir() else job.resolve().parent
    for directory in [start, *start.parents]:
        candidate = directory / CFG.spec_files.project
        if candidate.is_file():
            logger.debug(f"Found project specification '{candidate}'.")
            return candidate

    raise SpecError(
        f"Could not find '{CFG.spec_files.project}' for job '{job}'. Use '--project' to specify it."
    )
