# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from datetime import datetime

import yaml
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from taskenv_lib.core.common import (
    format_duration,
    format_timestamp,
    get_panel_width,
    load_yaml_dumper,
)
from taskenv_lib.core.config import CFG
from taskenv_lib.core.constants import DEND, DSTART
from taskenv_lib.properties.window import TruncateTo, Window

Dumper: type[yaml.Dumper] = load_yaml_dumper()


class WindowPresenter:
    """
    Presentation layer for the effective window of a job.
    """

    def __init__(self, job_name: str, window: Window, scheduled_at: datetime):
        """
        Initialize the presenter and resolve the window.

        Raises:
            InvalidWindowPolicyError: If the window policy is invalid.
        """
        self._job_name = job_name
        self._window = window
        self._scheduled_at = scheduled_at
        self._start, self._end = window.resolve(scheduled_at)

    def createPanel(self, console: Console | None = None) -> Group:
        """
        Create a panel describing the window policy and the resolved window.

        Args:
            console (Console | None): Optional Rich console.
                If not provided, a new Console is created.

        Returns:
            Group: A Rich Group containing the panel.
        """
        console = console or Console()
        settings = CFG.presenter.window_panel

        panel = Panel(
            self._createTable(),
            title=Text(
                f"JOB: {self._job_name}", style=settings.title_style, justify="center"
            ),
            border_style=settings.border_style,
            padding=(1, 2),
            width=get_panel_width(console, 3, settings.min_width, settings.max_width),
        )

        return Group(Text(""), panel, Text(""))

    def toYaml(self) -> str:
        """
        Serialize the policy and the resolved window to YAML.
        """
        return yaml.dump(
            {
                "scheduled_at": format_timestamp(self._scheduled_at),
                "window": self._window.toDict(),
                DSTART: format_timestamp(self._start),
                DEND: format_timestamp(self._end),
            },
            default_flow_style=False,
            sort_keys=False,
            Dumper=Dumper,
        )

    def _createTable(self) -> Table:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(justify="right", style=CFG.presenter.key_style)
        table.add_column(
            justify="left", overflow="fold", style=CFG.presenter.value_style
        )

        table.add_row("Scheduled at:", Text(format_timestamp(self._scheduled_at)))
        table.add_row("Size:", Text(format_duration(self._window.size)))
        table.add_row("Offset:", Text(format_duration(self._window.offset)))
        table.add_row(
            "Truncate to:", Text(str(TruncateTo.fromStr(self._window.truncate_to)))
        )
        table.add_row("", "")
        table.add_row(f"{DSTART}:", Text(format_timestamp(self._start)))
        table.add_row(f"{DEND}:", Text(format_timestamp(self._end)))

        return table
