"""
Thin wrapper around the git command line.

Every invocation carries the run's committer identity in its environment,
so nothing is written to the global git configuration.
"""

import logging
import os
import re
import subprocess
from dataclasses import dataclass

from autobackport.errors import GitError

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"x-access-token:[^@\s]+@")


def redact(text: str) -> str:
    """Hide access tokens embedded in clone URLs."""
    return _TOKEN_PATTERN.sub("x-access-token:***@", text)


def run(
    cmd: list[str], cwd: str | None = None, check: bool = True, env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess:
    """Run a command and return the result."""
    logger.debug(f"Running: {redact(' '.join(cmd))}")
    result = subprocess.run(cmd, cwd=cwd, env=env, capture_output=True, text=True)
    if check and result.returncode != 0:
        raise GitError(redact(" ".join(cmd)), result.returncode, redact(result.stderr or result.stdout))
    return result


def run_no_check(cmd: list[str], cwd: str | None = None, env: dict[str, str] | None = None) -> subprocess.CompletedProcess:
    """Run a command and return the result without raising on non-zero exit."""
    return run(cmd, cwd=cwd, check=False, env=env)


# Git status --porcelain: first two chars = index + work tree; unmerged codes:
# UU = both modified, DU = deleted by us/updated by them, UD = updated by us/deleted by them,
# DD = both deleted, AA = both added
_CONFLICT_TYPE_LABELS = {
    "UU": "both modified",
    "AA": "both added",
    "DD": "both deleted",
    "DU": "modify/delete (deleted by us, changed by them)",
    "UD": "modify/delete (changed by us, deleted by them)",
}


@dataclass(frozen=True)
class GitIdentity:
    """Committer identity used for the commits of one run."""

    name: str = "github-actions[bot]"
    email: str = "github-actions[bot]@users.noreply.github.com"

    def as_env(self) -> dict[str, str]:
        """The process environment with this identity as author and committer."""
        return {
            **os.environ,
            "GIT_AUTHOR_NAME": self.name,
            "GIT_AUTHOR_EMAIL": self.email,
            "GIT_COMMITTER_NAME": self.name,
            "GIT_COMMITTER_EMAIL": self.email,
        }


class Git:
    """git commands bound to one working copy and one identity."""

    def __init__(self, cwd: str, identity: GitIdentity | None = None):
        self.cwd = cwd
        self.identity = identity or GitIdentity()

    def __call__(self, *args: str) -> subprocess.CompletedProcess:
        return run(["git", *args], cwd=self.cwd, env=self.identity.as_env())

    def run_no_check(self, *args: str) -> subprocess.CompletedProcess:
        return run_no_check(["git", *args], cwd=self.cwd, env=self.identity.as_env())

    @classmethod
    def clone(cls, url: str, dest: str, identity: GitIdentity | None = None) -> "Git":
        """Clone ``url`` into ``dest`` and return a Git bound to the clone."""
        run(["git", "clone", url, dest])
        return cls(dest, identity)

    def switch(self, branch: str, create: bool = False) -> None:
        if create:
            self("switch", "--create", branch)
        else:
            self("switch", branch)

    def cherry_pick(self, commit: str) -> None:
        """Apply ``commit`` to the index and work tree without committing."""
        result = self.run_no_check("cherry-pick", "-x", "-n", commit)
        if result.returncode == 0:
            return
        message = result.stderr or result.stdout
        conflicted = self.get_conflicted_entries()
        if conflicted:
            lines = [f"  {path}  ({kind})" for path, kind in conflicted]
            message = message.rstrip() + f"\nConflicts in {len(conflicted)} file(s):\n" + "\n".join(lines)
        raise GitError(f"git cherry-pick -x -n {commit}", result.returncode, message)

    def rollback_cherry_pick(self) -> None:
        """
        Undo a partially applied cherry-pick.

        ``cherry-pick -n`` leaves no CHERRY_PICK_HEAD behind, in which case
        ``--abort`` refuses to run and the index is reset instead. Failures
        here are logged, never raised.
        """
        if self.is_cherry_pick_in_progress():
            result = self.run_no_check("cherry-pick", "--abort")
            if result.returncode == 0:
                return
            logger.debug(f"cherry-pick --abort failed: {result.stderr.strip()}")
        result = self.run_no_check("reset", "--merge")
        if result.returncode != 0:
            logger.warning(f"Could not roll back the cherry-pick: {result.stderr.strip()}")

    def restore_from_head(self, path: str) -> None:
        self("checkout", "HEAD", path)

    def commit(self) -> None:
        self("commit", "--no-edit", "-s")

    def push(self, branch: str) -> None:
        self("push", "--set-upstream", "origin", branch)

    def delete_remote_branch(self, branch: str, remote: str = "origin") -> None:
        self("push", "--delete", "--force", remote, branch)

    def is_cherry_pick_in_progress(self) -> bool:
        result = self.run_no_check("rev-parse", "-q", "--verify", "CHERRY_PICK_HEAD")
        return result.returncode == 0

    def get_conflicted_entries(self) -> list[tuple[str, str]]:
        """Return list of (path, conflict_type_label) for unmerged paths."""
        result = self.run_no_check("status", "--porcelain", "-u")
        if result.returncode != 0:
            return []
        entries: list[tuple[str, str]] = []
        for line in result.stdout.splitlines():
            if len(line) < 4:
                continue
            code = line[:2]
            rest = line[3:].strip()
            # Handle "old -> new" renames
            path = rest.split(" -> ")[-1].strip() if " -> " in rest else rest
            if code in _CONFLICT_TYPE_LABELS:
                entries.append((path, _CONFLICT_TYPE_LABELS[code]))
        return entries
