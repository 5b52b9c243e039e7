"""Coprocess pipeline runner: spawn every stage, then wait on each in order."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import IO, Any

from xcopr.config.settings import (
    DEFAULT_SHELL_FLAGS,
    DEFAULT_SHELL_PROGRAM,
    settings,
)
from xcopr.runtime.errors import (
    ExitError,
    MissingArgumentsError,
    SpawnFailedError,
    StdoutNotCapturedError,
    WaitFailedError,
)

logger = logging.getLogger(__name__)

# None inherits the runner's own stream.
StreamTarget = IO[Any] | int | None


class StreamEndpoint(str, Enum):
    """Where one side of a stage's standard streams is connected."""

    RUNNER = "runner"  # Inherited from the runner process
    PIPE = "pipe"  # Anonymous pipe shared with the adjacent stage


@dataclass(frozen=True, slots=True)
class ShellInterpreter:
    """Command interpreter used to execute each command string."""

    program: str = DEFAULT_SHELL_PROGRAM
    flags: tuple[str, ...] = DEFAULT_SHELL_FLAGS

    @classmethod
    def from_settings(cls) -> ShellInterpreter:
        interpreter = cls(
            program=settings.shell_program, flags=tuple(settings.shell_flags)
        )
        if interpreter != cls():
            logger.info(
                "Shell interpreter overridden by settings: %s",
                " ".join(interpreter.argv("<command>")),
            )
        return interpreter

    def argv(self, command: str) -> list[str]:
        return [self.program, *self.flags, "-c", command]


@dataclass(frozen=True, slots=True)
class Stage:
    """A spawned command together with its live process and stream wiring."""

    index: int
    command: str
    process: subprocess.Popen[bytes]
    stdin: StreamEndpoint
    stdout: StreamEndpoint

    @property
    def pid(self) -> int:
        return self.process.pid


@dataclass(frozen=True, slots=True)
class StageEvent:
    """Lifecycle event emitted while running a pipeline."""

    event_type: str
    index: int
    command: str
    pid: int
    stdin: StreamEndpoint
    stdout: StreamEndpoint
    returncode: int | None = None


@dataclass(frozen=True, slots=True)
class StageResult:
    """Termination result for one stage."""

    index: int
    command: str
    pid: int
    returncode: int


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Successful outcome of a whole pipeline run."""

    stages: tuple[StageResult, ...]

    @property
    def commands(self) -> tuple[str, ...]:
        return tuple(stage.command for stage in self.stages)


class PipelineRunner:
    """Runs an ordered chain of shell commands connected by pipes."""

    def __init__(self, *, interpreter: ShellInterpreter | None = None) -> None:
        self._interpreter = interpreter

    @property
    def interpreter(self) -> ShellInterpreter:
        """Configured interpreter, or the one from settings when unset."""
        if self._interpreter is not None:
            return self._interpreter
        return ShellInterpreter.from_settings()

    def run(
        self,
        *,
        commands: Sequence[str],
        stdin: StreamTarget = None,
        stdout: StreamTarget = None,
        on_event: Callable[[StageEvent], None] | None = None,
    ) -> PipelineResult:
        """Spawn every command as a pipe chain, then wait on each in spawn order.

        Args:
            commands: Command strings, first to last.
            stdin: Input for the first stage (default: inherit).
            stdout: Output for the last stage (default: inherit).
            on_event: Optional callback for spawn/exit events.

        Returns:
            Per-stage results when every stage exits with status 0.

        Raises:
            XcoprError: The first failure encountered, in phase order.
        """
        if not commands:
            raise MissingArgumentsError("coproc")

        stages = self._spawn_all(
            list(commands),
            interpreter=self.interpreter,
            stdin=stdin,
            stdout=stdout,
            on_event=on_event,
        )
        return self._wait_all(stages, on_event=on_event)

    def _spawn_all(
        self,
        commands: list[str],
        *,
        interpreter: ShellInterpreter,
        stdin: StreamTarget,
        stdout: StreamTarget,
        on_event: Callable[[StageEvent], None] | None,
    ) -> list[Stage]:
        stages: list[Stage] = []
        last_index = len(commands) - 1
        upstream: IO[bytes] | None = None

        for index, command in enumerate(commands):
            is_last = index == last_index
            try:
                process = self._spawn(
                    interpreter,
                    index=index,
                    command=command,
                    stdin=stdin if upstream is None else upstream,
                    stdout=stdout if is_last else subprocess.PIPE,
                )
            finally:
                # The child holds its own copy now; ours would keep the
                # writer from seeing a broken pipe when this stage exits.
                if upstream is not None:
                    upstream.close()

            stage = Stage(
                index=index,
                command=command,
                process=process,
                stdin=StreamEndpoint.RUNNER if index == 0 else StreamEndpoint.PIPE,
                stdout=StreamEndpoint.RUNNER if is_last else StreamEndpoint.PIPE,
            )

            if is_last:
                upstream = None
            elif process.stdout is None:
                logger.warning("Stage %d stdout was not captured: %s", index, command)
                raise StdoutNotCapturedError(command)
            else:
                upstream = process.stdout

            stages.append(stage)
            try:
                _emit_event(on_event, _stage_event("spawned", stage))
            except BaseException:
                if upstream is not None:
                    upstream.close()
                raise

        return stages

    def _spawn(
        self,
        interpreter: ShellInterpreter,
        *,
        index: int,
        command: str,
        stdin: StreamTarget,
        stdout: StreamTarget,
    ) -> subprocess.Popen[bytes]:
        try:
            process = subprocess.Popen(
                interpreter.argv(command),
                stdin=stdin,
                stdout=stdout,
            )
        except OSError as exc:
            logger.warning("Failed to spawn stage %d (%s): %s", index, command, exc)
            raise SpawnFailedError(command, exc) from exc

        logger.info("Spawned stage %d pid=%d: %s", index, process.pid, command)
        return process

    def _wait_all(
        self,
        stages: list[Stage],
        *,
        on_event: Callable[[StageEvent], None] | None,
    ) -> PipelineResult:
        results: list[StageResult] = []

        for stage in stages:
            try:
                returncode = stage.process.wait()
            except OSError as exc:
                logger.warning("Failed to wait on stage %d: %s", stage.index, exc)
                raise WaitFailedError(stage.command, exc) from exc

            logger.debug(
                "Stage %d pid=%d exited with %d", stage.index, stage.pid, returncode
            )
            _emit_event(on_event, _stage_event("exited", stage, returncode))

            if returncode != 0:
                logger.warning(
                    "Stage %d failed with %d: %s",
                    stage.index,
                    returncode,
                    stage.command,
                )
                raise ExitError(stage.command, returncode)

            results.append(
                StageResult(
                    index=stage.index,
                    command=stage.command,
                    pid=stage.pid,
                    returncode=returncode,
                )
            )

        return PipelineResult(stages=tuple(results))


def _stage_event(
    event_type: str, stage: Stage, returncode: int | None = None
) -> StageEvent:
    return StageEvent(
        event_type=event_type,
        index=stage.index,
        command=stage.command,
        pid=stage.pid,
        stdin=stage.stdin,
        stdout=stage.stdout,
        returncode=returncode,
    )


def _emit_event(
    on_event: Callable[[StageEvent], None] | None,
    event: StageEvent,
) -> None:
    if on_event is None:
        return
    on_event(event)


_DEFAULT_PIPELINE_RUNNER = PipelineRunner()


def get_pipeline_runner() -> PipelineRunner:
    """Return shared pipeline runner instance."""
    return _DEFAULT_PIPELINE_RUNNER
