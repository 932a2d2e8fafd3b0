"""
Action inputs and the run configuration built from them.

The Actions runner exposes each ``with:`` input as an ``INPUT_<NAME>``
environment variable, upper-cased with spaces turned into underscores.
"""

import os
from dataclasses import dataclass, field

DEFAULT_TITLE_TEMPLATE = "[Backport {{base}}] {{originalTitle}}"


def get_input(name: str) -> str:
    return os.environ.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()


def parse_comma_delimited_strings(value: str | None, unique: bool = True) -> list[str]:
    """
    Split a comma-delimited string into trimmed, non-empty items.

    With ``unique`` the first occurrence of each item is kept and later
    duplicates dropped.
    """
    if not value:
        return []
    items = [item.strip() for item in value.split(",")]
    items = [item for item in items if item]
    if unique:
        items = list(dict.fromkeys(items))
    return items


def get_files_to_skip(value: str | None) -> list[str]:
    return parse_comma_delimited_strings(value, unique=False)


def get_labels_to_add(value: str | None) -> list[str]:
    return parse_comma_delimited_strings(value)


def parse_bool(value: str | None) -> bool:
    return value == "true"


@dataclass(frozen=True)
class BackportConfiguration:
    token: str
    title_template: str = DEFAULT_TITLE_TEMPLATE
    branch_name: str = ""
    delete_branch: bool = False
    files_to_skip: tuple[str, ...] = field(default_factory=tuple)
    labels_to_add: tuple[str, ...] = field(default_factory=tuple)

