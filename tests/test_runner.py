import os
import sys

import pytest

from prepush_gate.runner import (
    COMMAND_NOT_EXECUTABLE,
    COMMAND_NOT_FOUND,
    CommandResult,
    format_command,
    run_command,
)


def test_run_command_success():
    result = run_command([sys.executable, "-c", "print('hi')"], capture=True)
    assert result.ok
    assert result.returncode == 0
    assert result.stdout.strip() == "hi"


def test_run_command_propagates_exit_code():
    result = run_command(
        [sys.executable, "-c", "import sys; sys.exit(3)"], capture=True
    )
    assert not result.ok
    assert result.returncode == 3


def test_run_command_missing_executable(capsys):
    result = run_command(["definitely-not-a-real-command-xyz"])
    assert result.returncode == COMMAND_NOT_FOUND
    assert not result.ok
    assert "command not found" in capsys.readouterr().err


def test_format_command_quotes_arguments():
    assert format_command(["make", "test"]) == "make test"
    assert format_command(["pytest", "-k", "a and b"]) == "pytest -k 'a and b'"


@pytest.mark.skipif(os.name == "nt", reason="exec bits are POSIX only")
def test_run_command_not_executable(tmp_path, capsys):
    script = tmp_path / "check.sh"
    script.write_text("#!/bin/sh\nexit 0\n")
    script.chmod(0o644)

    result = run_command([str(script)])

    assert result.returncode == COMMAND_NOT_EXECUTABLE
    assert not result.ok
    assert "permission denied" in capsys.readouterr().err


@pytest.mark.skipif(os.name == "nt", reason="POSIX path semantics")
def test_run_command_bad_path_component(tmp_path):
    plain = tmp_path / "plain.txt"
    plain.write_text("x")

    result = run_command([str(plain / "check")], capture=True)

    assert result.returncode == COMMAND_NOT_FOUND
    assert str(plain / "check") in result.stderr


def test_command_result_output_joins_streams():
    result = CommandResult(["x"], 1, stdout="out\n", stderr="err\n")
    assert result.output == "out\nerr\n"
    assert CommandResult(["x"], 0).output == ""
