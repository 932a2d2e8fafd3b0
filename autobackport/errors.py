"""Exceptions raised by autobackport."""


class BackportError(RuntimeError):
    """Base class for errors autobackport knows how to report."""


class ConfigurationError(BackportError):
    """A required input is missing or the event payload cannot be used."""


class GitError(BackportError):
    """A git command exited with a non-zero status."""

    def __init__(self, command: str, returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed: {command}"
        if stderr.strip():
            message += f"\n{stderr.strip()}"
        super().__init__(message)
