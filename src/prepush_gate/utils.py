import os
import shlex
from dataclasses import dataclass, field
from typing import List

from .limits import DEFAULT_FD_LIMIT
from .runner import format_command

DEFAULT_CONFIG_PATH = ".prepush-gate"
DEFAULT_COMMAND = "make test"

# Environment variables that override the config file
COMMAND_ENV = "PREPUSH_GATE_COMMAND"
FD_LIMIT_ENV = "PREPUSH_GATE_FD_LIMIT"

# Environment variable to automatically answer yes to prompts
ASSUME_YES_ENV = "PREPUSH_GATE_ASSUME_YES"


@dataclass
class Step:
    name: str
    command: List[str]

    @classmethod
    def from_string(cls, text: str) -> "Step":
        command = shlex.split(text)
        if not command:
            raise ValueError("command must not be empty")
        return cls(name=format_command(command), command=command)


@dataclass
class GateConfig:
    steps: List[Step] = field(
        default_factory=lambda: [Step.from_string(DEFAULT_COMMAND)]
    )
    fd_limit: int = DEFAULT_FD_LIMIT
    # Capture step output and only show it when the step fails
    quiet: bool = False


def prompt_yes_no(message: str, default: bool = True) -> bool:
    """Prompt the user with a yes/no question.

    If ``PREPUSH_GATE_ASSUME_YES`` is set to a truthy value (``1``,
    ``true``, ``yes``), the prompt is bypassed and ``True`` is returned
    immediately.

    Args:
        message: The question to display to the user.
        default: The return value if the user just hits enter.

    Returns:
        ``True`` for yes and ``False`` for no.
    """

    assume = os.environ.get(ASSUME_YES_ENV, "").lower()
    if assume in {"1", "true", "yes"}:
        print(f"{message} [Y/n]: y (auto)")
        return True

    prompt = f"{message} [{'Y/n' if default else 'y/N'}]: "
    while True:
        choice = input(prompt).strip().lower()
        if not choice:
            return default
        if choice in ("y", "yes"):
            return True
        if choice in ("n", "no"):
            return False
        print("Please enter 'y' or 'n'.")


def parse_fd_limit(value: str) -> int:
    try:
        limit = int(value)
    except ValueError:
        raise ValueError(f"fd_limit must be an integer, got {value!r}") from None
    if limit <= 0:
        raise ValueError(f"fd_limit must be positive, got {limit}")
    return limit


def read_config_lines(path: str) -> List[tuple]:
    """Read ``key=value`` pairs from ``path`` in file order.

    Ignores blank lines, comments and lines without '='. Keys may repeat.
    """
    pairs = []
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    with open(path, encoding="utf-8") as f:
        for raw in f:
            line = raw.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            pairs.append((key.strip(), value.strip()))
    return pairs


def load_gate_config(path: str = DEFAULT_CONFIG_PATH) -> GateConfig:
    try:
        pairs = read_config_lines(path)
    except FileNotFoundError:
        pairs = []

    cfg = GateConfig()
    commands = [value for key, value in pairs if key == "command"]
    if commands:
        cfg.steps = [Step.from_string(c) for c in commands]
    for key, value in pairs:
        if key == "fd_limit":
            cfg.fd_limit = parse_fd_limit(value)

    env_command = os.environ.get(COMMAND_ENV, "").strip()
    if env_command:
        cfg.steps = [Step.from_string(env_command)]
    env_limit = os.environ.get(FD_LIMIT_ENV, "").strip()
    if env_limit:
        cfg.fd_limit = parse_fd_limit(env_limit)

    return cfg
