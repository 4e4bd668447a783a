"""Commit hash lookups, as plain values and as expanded source text.

``git_hash`` and ``git_short_hash`` return the value or raise a
:class:`~git_const.diagnostics.BuildDiagnostic`. The ``expand_*`` variants
never raise one: they return either a quoted literal or the failure directive
for the requested target, which is what ends up in a generated unit.
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .decoder import decode_single_line
from .diagnostics import BuildDiagnostic, InvalidRevisionError, compile_error
from .runner import run_git
from .targets import Target, get_target


DEFAULT_REVISION = "HEAD"


class HashKind(Enum):
    """Which form of the commit hash to produce."""
    FULL = "full"
    SHORT = "short"

    @classmethod
    def parse(cls, value: Union[str, "HashKind"]) -> "HashKind":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        aliases = {"full": cls.FULL, "hash": cls.FULL, "short": cls.SHORT, "short-hash": cls.SHORT}
        if normalized not in aliases:
            raise ValueError(f"Unknown hash kind: {value}. Use 'full' or 'short'")
        return aliases[normalized]

    def rev_parse_args(self, revision: str) -> list:
        if self is HashKind.SHORT:
            return ["rev-parse", "--short", revision]
        return ["rev-parse", revision]


def resolve_revision(token: Optional[str] = None) -> str:
    """Return the trimmed revision, or ``HEAD`` when absent or blank.

    Raises:
        InvalidRevisionError: If the token starts with ``-``; git would parse
            it as an option and print something other than a hash.
    """
    if token is None:
        return DEFAULT_REVISION
    revision = token.strip()
    if revision.startswith("-"):
        raise compile_error(f"invalid revision {revision!r}: must not start with '-'",
                            InvalidRevisionError)
    return revision or DEFAULT_REVISION


def lookup(kind: Union[str, HashKind], revision: Optional[str] = None, *,
           cwd: Optional[Union[str, Path]] = None, git: str = "git") -> str:
    """Resolve ``revision`` to a commit hash of the given kind."""
    kind = HashKind.parse(kind)
    output = run_git(kind.rev_parse_args(resolve_revision(revision)), cwd=cwd, git=git)
    return decode_single_line(output)


def git_hash(revision: Optional[str] = None, *, cwd: Optional[Union[str, Path]] = None,
             git: str = "git") -> str:
    """Full commit hash of ``revision`` (``HEAD`` by default)."""
    return lookup(HashKind.FULL, revision, cwd=cwd, git=git)


def git_short_hash(revision: Optional[str] = None, *, cwd: Optional[Union[str, Path]] = None,
                   git: str = "git") -> str:
    """Abbreviated commit hash of ``revision``, as git's default length."""
    return lookup(HashKind.SHORT, revision, cwd=cwd, git=git)


def expand(kind: Union[str, HashKind], revision: Optional[str] = None,
           target: Union[str, Target] = "python", *,
           cwd: Optional[Union[str, Path]] = None, git: str = "git") -> str:
    """Quoted hash literal, or the failure directive if the lookup failed."""
    if isinstance(target, str):
        target = get_target(target)
    try:
        value = lookup(kind, revision, cwd=cwd, git=git)
    except BuildDiagnostic as e:
        return e.render(target)
    return target.quote(value)


def expand_hash(revision: Optional[str] = None, target: Union[str, Target] = "python",
                **kwargs) -> str:
    return expand(HashKind.FULL, revision, target, **kwargs)


def expand_short_hash(revision: Optional[str] = None, target: Union[str, Target] = "python",
                      **kwargs) -> str:
    return expand(HashKind.SHORT, revision, target, **kwargs)
