from __future__ import annotations

import io

from rich.console import Console

from xcopr.cli.report import StageReport
from xcopr.runtime.pipeline import StageEvent, StreamEndpoint


def _event(event_type: str, index: int, returncode: int | None = None) -> StageEvent:
    return StageEvent(
        event_type=event_type,
        index=index,
        command=f"stage-{index} [bold]",
        pid=1000 + index,
        stdin=StreamEndpoint.RUNNER if index == 0 else StreamEndpoint.PIPE,
        stdout=StreamEndpoint.PIPE if index == 0 else StreamEndpoint.RUNNER,
        returncode=returncode,
    )


def test_report_folds_spawn_and_exit_events() -> None:
    report = StageReport()
    for event in (
        _event("spawned", 0),
        _event("spawned", 1),
        _event("exited", 0, returncode=-13),
    ):
        report.record(event)

    assert report.rows[0].status == "signal 13 (SIGPIPE)"
    assert report.rows[1].status == "not waited"
    assert report.rows[1].stdin == "pipe"
    assert report.rows[1].stdout == "runner"


def test_report_renders_commands_without_markup() -> None:
    report = StageReport()
    report.record(_event("spawned", 0))
    report.record(_event("exited", 0, returncode=0))
    buffer = io.StringIO()

    report.render(Console(file=buffer, width=120))

    output = buffer.getvalue()
    assert "stage-0 [bold]" in output
    assert "exit status 0" in output
    assert "1000" in output
