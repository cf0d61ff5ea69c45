# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import yaml
from rich.console import Console, Group
from rich.padding import Padding
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from taskenv_lib.core.common import get_panel_width, load_yaml_dumper
from taskenv_lib.core.config import CFG

Dumper: type[yaml.Dumper] = load_yaml_dumper()


class GeneratePresenter:
    """
    Presentation layer for a generated instance configuration.
    """

    def __init__(
        self,
        title: str,
        env_map: dict[str, str],
        file_map: dict[str, str],
    ):
        """
        Initialize the presenter.

        Args:
            title (str): Title of the panel, typically the job and unit name.
            env_map (dict[str, str]): Generated environment variables.
            file_map (dict[str, str]): Generated file contents keyed by file name.
        """
        self._title = title
        self._env_map = env_map
        self._file_map = file_map

    def createPanel(self, console: Console | None = None) -> Group:
        """
        Create a panel listing the environment and the files.

        Args:
            console (Console | None): Optional Rich console.
                If not provided, a new Console is created.

        Returns:
            Group: A Rich Group containing the panel.
        """
        console = console or Console()
        settings = CFG.presenter.generate_panel

        sections = [
            Padding(self._createEnvTable(), (0, 2)),
        ]
        for name, content in self._file_map.items():
            sections.extend(
                [
                    Text(""),
                    Rule(
                        title=Text(name, style=settings.title_style),
                        style=settings.rule_style,
                    ),
                    Text(""),
                    Padding(self._createFileText(content), (0, 2)),
                ]
            )

        panel = Panel(
            Group(*sections),
            title=Text(self._title, style=settings.title_style, justify="center"),
            border_style=settings.border_style,
            # no horizontal padding so Rule reaches borders
            padding=(1, 0),
            width=get_panel_width(console, 2, settings.min_width, settings.max_width),
        )

        return Group(Text(""), panel, Text(""))

    def toYaml(self) -> str:
        """
        Serialize the generated configuration to YAML with `env` and `files` keys.
        """
        return yaml.dump(
            {"env": self._env_map, "files": self._file_map},
            default_flow_style=False,
            sort_keys=False,
            Dumper=Dumper,
        )

    def _createEnvTable(self) -> Table:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(justify="right", style=CFG.presenter.key_style, no_wrap=True)
        table.add_column(
            justify="left", overflow="fold", style=CFG.presenter.value_style
        )

        for key, value in self._env_map.items():
            table.add_row(f"{key}:", Text(value))

        return table

    def _createFileText(self, content: str) -> Text:
        """Return the file content, truncated to the configured number of lines."""
        lines = content.splitlines()
        limit = CFG.presenter.max_asset_lines
        if len(lines) <= limit:
            return Text(content, style=CFG.presenter.value_style)

        text = Text("\n".join(lines[:limit]), style=CFG.presenter.value_style)
        text.append(
            f"\n... ({len(lines) - limit} more lines)", style=CFG.presenter.notes_style
        )
        return text
