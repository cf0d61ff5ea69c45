# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand
from rich.console import Console

from taskenv_lib.core.common import parse_timestamp
from taskenv_lib.core.config import CFG
from taskenv_lib.core.error import TaskEnvError
from taskenv_lib.core.logger import get_logger
from taskenv_lib.specs.job import JobSpec

from .presenter import WindowPresenter

logger = get_logger(__name__)
console = Console()


@click.command(
    short_help="Preview the data window of a job.",
    help=f"""Show the data window an instance of a job would process.

{click.style("JOB", fg="green")}   Path to the job directory or to the job specification file.

The window is computed from the window policy of the job's task and the time the
instance is scheduled at. Its bounds are the values of DSTART and DEND that
`{CFG.binary_name} generate` passes to the instance.""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument("job", type=str, metavar=click.style("JOB", fg="green"))
@click.option(
    "--scheduled-at",
    "-t",
    type=str,
    required=True,
    help="Scheduled time of the instance as an RFC 3339 timestamp, e.g. '2020-11-11T00:00:00Z'.",
)
@click.option(
    "--yaml",
    "as_yaml",
    is_flag=True,
    help="Print the window as YAML instead of a panel.",
)
def window(job: str, scheduled_at: str, as_yaml: bool = False) -> NoReturn:
    """
    Preview the data window of the specified job.
    """
    try:
        job_spec = JobSpec.fromFile(Path(job))
        presenter = WindowPresenter(
            job_spec.name, job_spec.task.window, parse_timestamp(scheduled_at)
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
