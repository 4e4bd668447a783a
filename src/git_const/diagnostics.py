"""Build diagnostics raised when a git constant cannot be produced.

A diagnostic is terminal for the unit that requested the constant. It can be
rendered as the target language's abort-with-message directive so that the
generated unit itself refuses to compile (or import).
"""
from __future__ import annotations

from typing import Optional

from .targets import get_target


class BuildDiagnostic(Exception):
    """Failure to produce a constant, carrying the message to report."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def render(self, target="python") -> str:
        """Render the failure directive for ``target`` (name or Target)."""
        if isinstance(target, str):
            target = get_target(target)
        return target.error_directive(self.message)


class SpawnError(BuildDiagnostic):
    """git could not be started at all."""


class ProcessFailure(BuildDiagnostic):
    """git exited with a non-zero status."""

    def __init__(self, message: str, status: int = 1, stderr: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.stderr = stderr


class InvalidRevisionError(BuildDiagnostic):
    """The revision token would be read by git as something else."""


class DecodeError(BuildDiagnostic):
    """git output could not be used as text."""


class EmptyOutputError(DecodeError):
    """git succeeded but printed nothing usable."""


def compile_error(message: str, kind: type = BuildDiagnostic) -> BuildDiagnostic:
    """Wrap ``message`` into a diagnostic of the given kind.

    Only reached on failure paths.
    """
    return kind(message)
