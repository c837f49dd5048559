"""Helpers for integration tests that drive a real git binary."""

import shutil
import subprocess
from pathlib import Path

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def run_git(cwd: Path, *args: str) -> str:
    """Run git with a fixed identity and return stripped stdout."""
    result = subprocess.run(
        ["git", "-c", "user.name=Seed", "-c", "user.email=seed@example.com", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def init_bare_remote(path: Path) -> Path:
    """Create an empty bare repository whose HEAD points at main."""
    path.mkdir(parents=True)
    run_git(path, "init", "--bare")
    run_git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    return path


def seed_remote(remote: Path, scratch: Path) -> None:
    """Push a single commit on main to remote."""
    run_git(scratch.parent, "clone", str(remote), str(scratch))
    run_git(scratch, "symbolic-ref", "HEAD", "refs/heads/main")
    (scratch / "README.md").write_text("seed\n", encoding="utf-8")
    run_git(scratch, "add", "README.md")
    run_git(scratch, "commit", "-m", "seed")
    run_git(scratch, "push", "origin", "main")
