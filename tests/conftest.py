from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest


GIT_IDENTITY = [
    "-c", "user.name=git-const tests",
    "-c", "user.email=tests@example.invalid",
    "-c", "commit.gpgsign=false",
    "-c", "tag.gpgsign=false",
]


def git(repo: Path, *args: str) -> str:
    out = subprocess.run(
        ["git", *GIT_IDENTITY, *args],
        cwd=repo,
        check=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    return out.stdout.decode().strip()


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture()
def git_repo(tmp_path):
    """Repository on branch ``main`` with two commits; the second is tagged ``v1``."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo, "commit", "-q", "--allow-empty", "-m", "initial")
    git(repo, "commit", "-q", "--allow-empty", "-m", "second")
    git(repo, "tag", "v1")
    return repo


@pytest.fixture()
def not_a_repo(tmp_path, monkeypatch):
    """Directory outside any repository."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    directory = tmp_path / "plain"
    directory.mkdir()
    # Keep git from walking up into an enclosing checkout.
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    return directory
