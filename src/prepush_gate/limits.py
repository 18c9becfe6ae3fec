"""Raise the soft limit on open file descriptors before running checks.

This works like ``ulimit -n 4096`` in a shell hook: the soft limit is set
to the target, or to the hard limit when the hard limit is lower. The hard
limit itself is left alone.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_FD_LIMIT = 4096


class LimitError(RuntimeError):
    """The open file limit could not be read or changed."""


@dataclass(frozen=True)
class LimitAdjustment:
    previous_soft: int
    hard: int
    soft: int

    @property
    def changed(self) -> bool:
        return self.previous_soft != self.soft


def _resource():
    try:
        import resource  # noqa
    except ImportError as exc:
        raise LimitError("resource limits are not supported on this platform") from exc
    return resource


def is_unlimited(value: int) -> bool:
    return value == _resource().RLIM_INFINITY


def describe_limit(value: int) -> str:
    if is_unlimited(value):
        return "unlimited"
    return str(value)


def compute_soft_limit(hard: int, target: int = DEFAULT_FD_LIMIT) -> int:
    """Return the soft limit to request for a given hard limit.

    An unbounded hard limit, or one at least ``target``, yields ``target``.
    Anything lower yields the hard limit, since the soft limit can't
    exceed it.
    """

    if is_unlimited(hard) or hard >= target:
        return target
    return hard


def raise_fd_limit(target: int = DEFAULT_FD_LIMIT) -> LimitAdjustment:
    """Set the process's soft ``RLIMIT_NOFILE`` and report the result.

    The change applies to the whole process and is inherited by any child
    started afterwards.
    """

    resource = _resource()
    try:
        soft, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    except (OSError, ValueError, OverflowError) as exc:
        raise LimitError(f"could not read the open file limit: {exc}") from exc

    new_soft = compute_soft_limit(hard, target)
    try:
        resource.setrlimit(resource.RLIMIT_NOFILE, (new_soft, hard))
    except (OSError, ValueError, OverflowError) as exc:
        raise LimitError(
            f"could not set the open file limit to {new_soft}: {exc}"
        ) from exc
    return LimitAdjustment(previous_soft=soft, hard=hard, soft=new_soft)
