"""Runs the git executable and captures what it printed."""
from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from .diagnostics import ProcessFailure, SpawnError, compile_error


INVALID_UTF8_PLACEHOLDER = "<invalid utf-8>"


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and captured output of one git invocation."""
    status: Optional[int]
    stdout: bytes
    stderr: bytes

    @property
    def success(self) -> bool:
        return self.status == 0

    @property
    def exit_code(self) -> int:
        """Exit status, or 1 when the process did not report one."""
        if self.status is None or self.status < 0:
            return 1
        return self.status

    def stderr_text(self) -> str:
        """Best-effort decoding of stderr for error messages."""
        try:
            return self.stderr.decode("utf-8")
        except UnicodeDecodeError:
            return INVALID_UTF8_PLACEHOLDER


def execute(args: Sequence[str], cwd: Optional[Union[str, Path]] = None,
            git: str = "git") -> ProcessResult:
    """Run ``git <args>`` to completion without any interactive input.

    Raises:
        SpawnError: If git could not be started.
    """
    cmd = [git, *args]
    try:
        completed = subprocess.run(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=str(cwd) if cwd is not None else None,
            check=False,
        )
    except OSError as e:
        raise compile_error(f"git execution error: {e}", SpawnError) from e

    return ProcessResult(
        status=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )


def run_git(args: Sequence[str], cwd: Optional[Union[str, Path]] = None,
            git: str = "git") -> bytes:
    """Run git and return its stdout.

    Args:
        args: Arguments passed after the executable, e.g. ``["rev-parse", "HEAD"]``.
        cwd: Directory to run in; the current directory when omitted.
        git: Executable name or path.

    Returns:
        bytes: Raw stdout of a successful run.

    Raises:
        SpawnError: If git could not be started.
        ProcessFailure: If git exited with a non-zero status.
    """
    result = execute(args, cwd=cwd, git=git)
    if result.success:
        return result.stdout

    status = result.exit_code
    stderr = result.stderr_text()
    raise ProcessFailure(
        f"git failed with status {status}:\n {stderr}", status=status, stderr=stderr
    )
