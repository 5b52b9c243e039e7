"""Runtime primitives for building and running coprocess pipelines."""

from xcopr.runtime.errors import (
    ExitError,
    MissingArgumentsError,
    SpawnFailedError,
    StdoutNotCapturedError,
    WaitFailedError,
    XcoprError,
)
from xcopr.runtime.pipeline import (
    PipelineResult,
    PipelineRunner,
    ShellInterpreter,
    StageEvent,
    StreamEndpoint,
    get_pipeline_runner,
)

__all__ = [
    "ExitError",
    "MissingArgumentsError",
    "PipelineResult",
    "PipelineRunner",
    "ShellInterpreter",
    "SpawnFailedError",
    "StageEvent",
    "StdoutNotCapturedError",
    "StreamEndpoint",
    "WaitFailedError",
    "XcoprError",
    "get_pipeline_runner",
]
