"""Backport merged GitHub PRs to the branches named by their labels."""

from autobackport.inputs import BackportConfiguration
from autobackport.cli import main

__all__ = ["main", "BackportConfiguration"]
