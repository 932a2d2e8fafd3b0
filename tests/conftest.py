"""
Shared fixtures: a bare ``origin`` with maintenance branches, a clone of it,
and a mocked GitHub repository.
"""

import subprocess
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from autobackport.event import PullRequestEvent


def git(cwd, *args):
    result = subprocess.run(
        [
            "git",
            "-c", "user.name=Test User",
            "-c", "user.email=test@example.com",
            "-c", "init.defaultBranch=main",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=cwd, capture_output=True, text=True, check=True,
    )
    return result.stdout.strip()


def write(path, text):
    path.write_text(text)


@pytest.fixture
def remote(tmp_path):
    """
    origin.git with three branches:

    - main: the merged change ("Fix bug (#42)") touching file.txt and CHANGELOG.md
    - release-1: before the change, cherry-picks cleanly
    - release-2: rewrote the same line of file.txt, cherry-pick conflicts
    """
    origin = tmp_path / "origin.git"
    seed = tmp_path / "seed"
    git(tmp_path, "init", "--bare", str(origin))
    git(tmp_path, "init", str(seed))

    write(seed / "file.txt", "line 1\n")
    write(seed / "CHANGELOG.md", "# Changelog\n")
    git(seed, "add", ".")
    git(seed, "commit", "-m", "Initial commit")
    git(seed, "branch", "release-1")

    git(seed, "switch", "-c", "release-2")
    write(seed / "file.txt", "line 1 as changed on release-2\n")
    git(seed, "commit", "-am", "Release 2 change")
    git(seed, "switch", "main")

    write(seed / "file.txt", "line 1 fixed\n")
    write(seed / "CHANGELOG.md", "# Changelog\n\n- Fix bug\n")
    git(seed, "commit", "-am", "Fix bug (#42)")
    sha = git(seed, "rev-parse", "HEAD")

    git(seed, "remote", "add", "origin", str(origin))
    git(seed, "push", "origin", "main", "release-1", "release-2")

    clone = tmp_path / "clone"
    git(tmp_path, "clone", str(origin), str(clone))
    return SimpleNamespace(origin=origin, clone=clone, sha=sha)


@pytest.fixture
def github_repo():
    """A mocked PyGithub Repository that hands out PR #101."""
    repo = MagicMock()
    repo.allow_merge_commit = False
    repo.allow_rebase_merge = False
    repo.create_pull.return_value = MagicMock(
        number=101,
        html_url="https://github.com/octo/widgets/pull/101",
    )
    repo.get_pull.return_value.is_merged.return_value = False
    return repo


@pytest.fixture
def github(github_repo):
    client = MagicMock()
    client.get_repo.return_value = github_repo
    return client


@pytest.fixture
def make_event(remote):
    def _make_event(labels, action="closed", label=None, merged=True):
        return PullRequestEvent(
            action=action,
            number=42,
            title="Fix bug",
            merged=merged,
            merge_commit_sha=remote.sha,
            owner="octo",
            repo="widgets",
            label=label,
            labels=list(labels),
        )
    return _make_event


@pytest.fixture
def run_git():
    return git
