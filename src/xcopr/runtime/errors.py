"""Error taxonomy for pipeline runs.

Every failure in a run maps to exactly one of these classes. Each carries the
offending command text (where there is one) so the user can tell which stage
failed and in which phase.
"""

from __future__ import annotations

import signal


class XcoprError(Exception):
    """Base exception for pipeline failures."""

    pass


class MissingArgumentsError(XcoprError):
    """Raised when a run is requested without any commands."""

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"missing required argument: {argument}")


class SpawnFailedError(XcoprError):
    """Raised when the OS refuses to launch a stage."""

    def __init__(self, command: str, source: OSError) -> None:
        self.command = command
        self.source = source
        super().__init__(f"failed to start subprocess `{command}`: {source}")


class StdoutNotCapturedError(XcoprError):
    """Raised when a non-final stage has no readable stdout pipe."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"stdout not captured for `{command}`")


class WaitFailedError(XcoprError):
    """Raised when waiting on a stage fails at the OS level."""

    def __init__(self, command: str, source: OSError) -> None:
        self.command = command
        self.source = source
        super().__init__(f"failed to wait on subprocess `{command}`: {source}")


class ExitError(XcoprError):
    """Raised when a stage terminates with a non-success status."""

    def __init__(self, command: str, returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(
            f"subprocess `{command}` failed with {describe_returncode(returncode)}"
        )


def describe_returncode(returncode: int) -> str:
    """Render a Popen return code the way a shell user would read it.

    Negative codes mean the process was killed by that signal number.
    """
    if returncode >= 0:
        return f"exit status {returncode}"
    signum = -returncode
    try:
        name = signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"
    return f"signal {signum} ({name})"
