"""Run the pre-push checks under a raised open file limit.

The gate raises the soft descriptor limit, runs each configured step in
order and stops at the first one that fails. The outcome is printed as a
colored banner and returned as an exit code for git to act on:

* ``0``: every step passed, the push goes ahead.
* ``1``: a step failed, the push is blocked.
* ``2``: the descriptor limit couldn't be raised, so nothing was run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, TextIO

from .limits import LimitAdjustment, LimitError, raise_fd_limit
from .runner import CommandResult, run_command
from .status import StatusReporter
from .utils import GateConfig, Step

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2

SUCCESS_BANNER = "All pre-push checks passed."
FAILURE_BANNER = "Pre-push checks failed."
LIMIT_BANNER = "Could not raise the open file limit."


@dataclass
class GateResult:
    exit_code: int
    limit: Optional[LimitAdjustment] = None
    failed_step: Optional[Step] = None

    @property
    def ok(self) -> bool:
        return self.exit_code == EXIT_OK


def run(
    config: Optional[GateConfig] = None,
    runner: Optional[Callable[..., CommandResult]] = None,
    limiter: Optional[Callable[[int], LimitAdjustment]] = None,
    stream: Optional[TextIO] = None,
) -> GateResult:
    config = config or GateConfig()
    runner = runner or run_command
    limiter = limiter or raise_fd_limit

    try:
        limit = limiter(config.fd_limit)
    except LimitError as exc:
        StatusReporter(stream=stream).failure(LIMIT_BANNER, str(exc))
        return GateResult(exit_code=EXIT_CONFIG_ERROR)

    reporter = StatusReporter(total=len(config.steps), stream=stream)
    failed = None
    with reporter:
        for step in config.steps:
            reporter.step(step.name)
            result = runner(step.command, capture=config.quiet)
            if not result.ok:
                failed = step
                break
            reporter.advance()

    if failed is not None:
        if config.quiet and result.output:
            reporter.log(result.output.rstrip())
        reporter.failure(FAILURE_BANNER, f"Failed step: {failed.name}")
        return GateResult(exit_code=EXIT_FAILED, limit=limit, failed_step=failed)

    reporter.success(SUCCESS_BANNER)
    return GateResult(exit_code=EXIT_OK, limit=limit)
