import shlex
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

# Exit statuses a POSIX shell reports when a command can't be started.
COMMAND_NOT_EXECUTABLE = 126
COMMAND_NOT_FOUND = 127


@dataclass
class CommandResult:
    command: Sequence[str]
    returncode: int
    stdout: Optional[str] = None
    stderr: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        return "".join(part for part in (self.stdout, self.stderr) if part)


def format_command(command: Sequence[str]) -> str:
    return " ".join(shlex.quote(part) for part in command)


def run_command(command: Sequence[str], capture: bool = False) -> CommandResult:
    """Run ``command`` to completion and return its exit status.

    Output goes straight to the terminal unless ``capture`` is set. A
    command that can't be started is reported as a failed run rather
    than raised, using the shell's 126/127 statuses.
    """

    try:
        result = subprocess.run(
            list(command),
            check=False,
            capture_output=capture,
            text=True,
        )
    except OSError as exc:
        if isinstance(exc, PermissionError):
            returncode = COMMAND_NOT_EXECUTABLE
            message = f"{command[0]}: permission denied"
        elif isinstance(exc, FileNotFoundError):
            returncode = COMMAND_NOT_FOUND
            message = f"{command[0]}: command not found"
        else:
            returncode = COMMAND_NOT_FOUND
            message = f"{command[0]}: {exc.strerror or exc}"
        if not capture:
            print(message, file=sys.stderr)
        return CommandResult(
            command=list(command),
            returncode=returncode,
            stderr=message if capture else None,
        )
    return CommandResult(
        command=list(command),
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )
