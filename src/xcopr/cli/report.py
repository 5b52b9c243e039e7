"""Per-stage report rendered to stderr for --verbose runs."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console
from rich.table import Table
from rich.text import Text

from xcopr.runtime.errors import describe_returncode
from xcopr.runtime.pipeline import StageEvent


@dataclass
class StageRow:
    """Latest known state of a stage, assembled from lifecycle events."""

    index: int
    command: str
    pid: int
    stdin: str
    stdout: str
    returncode: int | None = None

    @property
    def status(self) -> str:
        if self.returncode is None:
            return "not waited"
        return describe_returncode(self.returncode)


@dataclass
class StageReport:
    """Collects StageEvents and renders them as a table."""

    rows: dict[int, StageRow] = field(default_factory=dict)

    def record(self, event: StageEvent) -> None:
        """Fold a lifecycle event into the report."""
        row = self.rows.get(event.index)
        if row is None:
            row = StageRow(
                index=event.index,
                command=event.command,
                pid=event.pid,
                stdin=event.stdin.value,
                stdout=event.stdout.value,
            )
            self.rows[event.index] = row
        if event.event_type == "exited":
            row.returncode = event.returncode

    def build_table(self) -> Table:
        table = Table(title="xcopr stages")
        table.add_column("#", justify="right")
        table.add_column("pid", justify="right")
        table.add_column("stdin")
        table.add_column("stdout")
        table.add_column("command")
        table.add_column("status")

        for index in sorted(self.rows):
            row = self.rows[index]
            if row.returncode == 0:
                style = "green"
            elif row.returncode is None:
                style = "dim"
            else:
                style = "red"
            table.add_row(
                str(row.index),
                str(row.pid),
                row.stdin,
                row.stdout,
                Text(row.command),
                Text(row.status, style=style),
            )
        return table

    def render(self, console: Console | None = None) -> None:
        """Print the table, to stderr unless a console is given."""
        console = console or Console(stderr=True)
        console.print(self.build_table())
