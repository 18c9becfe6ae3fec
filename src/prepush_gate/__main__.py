"""Command-line interface for the pre-push gate.

By default it raises the open file limit, runs the configured test
command and exits with status ``0`` when it passes or ``1`` when it
fails, which is what git expects from a pre-push hook. Use the
``install`` subcommand to put the hook in place for the current
repository.

Anything after a bare ``--`` is run instead of the configured steps, for
example ``prepush-gate run --fd-limit 2048 -- pytest -x``. Options may be
given before or after the subcommand.

The ``-y/--yes`` flag can be used to automatically answer ``yes`` to any
interactive prompts.
"""

import argparse
import os
import sys

from . import gate, install, limits
from .runner import format_command
from .utils import ASSUME_YES_ENV, DEFAULT_CONFIG_PATH, Step, load_gate_config


def _add_common(parser: argparse.ArgumentParser, default) -> None:
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        default=default(False),
        help="Automatically answer yes to confirmation prompts.",
    )
    parser.add_argument(
        "--config",
        default=default(DEFAULT_CONFIG_PATH),
        help="Path to the gate configuration",
    )
    parser.add_argument(
        "--fd-limit",
        type=int,
        default=default(None),
        help="Soft open file limit to request (default 4096)",
    )


def split_command(argv):
    """Split ``argv`` at the first bare ``--`` into options and a command."""
    if "--" not in argv:
        return list(argv), []
    idx = argv.index("--")
    return list(argv[:idx]), list(argv[idx + 1 :])


def parse_args() -> argparse.Namespace:
    options, command = split_command(sys.argv[1:])

    parser = argparse.ArgumentParser(
        prog="prepush-gate",
        description="Raise the open file limit and run tests before a push",
    )
    _add_common(parser, lambda value: value)
    # Subcommands accept the same options without clobbering earlier ones
    common = argparse.ArgumentParser(add_help=False)
    _add_common(common, lambda value: argparse.SUPPRESS)

    sub = parser.add_subparsers(dest="subcommand")
    run = sub.add_parser(
        "run",
        parents=[common],
        help="Run the configured checks (default)",
    )
    run.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only show a step's output when it fails",
    )
    sub.add_parser(
        "limits",
        parents=[common],
        help="Raise the open file limit and show the result",
    )
    inst = sub.add_parser(
        "install",
        parents=[common],
        help="Install the pre-push hook into the current repository",
    )
    inst.add_argument(
        "--force", action="store_true", help="Overwrite an existing hook"
    )

    args = parser.parse_args(options)
    if command and args.subcommand not in (None, "run"):
        parser.error(f"a command after -- is only accepted by run, not {args.subcommand}")
    args.argv = command
    return args


def _load_config(args: argparse.Namespace):
    cfg = load_gate_config(args.config)
    if args.fd_limit is not None:
        if args.fd_limit <= 0:
            raise ValueError(f"fd_limit must be positive, got {args.fd_limit}")
        cfg.fd_limit = args.fd_limit
    if args.argv:
        cfg.steps = [Step(name=format_command(args.argv), command=args.argv)]
    cfg.quiet = getattr(args, "quiet", False)
    return cfg


def main() -> None:
    args = parse_args()
    if args.yes:
        os.environ[ASSUME_YES_ENV] = "1"

    if args.subcommand == "install":
        try:
            install.install_hook(".", force=args.force)
        except (FileNotFoundError, FileExistsError) as exc:
            print(f"Hook not installed: {exc}", file=sys.stderr)
            sys.exit(1)
        return

    try:
        cfg = _load_config(args)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        sys.exit(gate.EXIT_CONFIG_ERROR)

    if args.subcommand == "limits":
        try:
            adj = limits.raise_fd_limit(cfg.fd_limit)
        except limits.LimitError as exc:
            print(str(exc), file=sys.stderr)
            sys.exit(gate.EXIT_CONFIG_ERROR)
        print(f"hard: {limits.describe_limit(adj.hard)}")
        print(f"soft: {limits.describe_limit(adj.previous_soft)} -> {adj.soft}")
        if not adj.changed:
            print("soft limit already at the requested value")
        return

    result = gate.run(cfg)
    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
