"""
Resolve backport targets from pull request labels.

A label ``backport <base>`` asks for the change to be backported to ``<base>``;
``backport <base> <head>`` additionally names the branch to create.
"""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

LABEL_PATTERN = re.compile(r"^backport (\S+)(?: (\S+))?$")


@dataclass(frozen=True)
class BackportTarget:
    base: str
    head: str


def get_label_names(action: str | None, label: str | None, labels: list[str]) -> list[str]:
    """Return the label names relevant to the triggering action."""
    if action == "closed":
        return list(labels)
    if action == "labeled":
        return [label] if label else []
    return []


def default_head(base: str, pull_request_number: int, branch_name: str = "") -> str:
    if branch_name:
        return f"{branch_name}-to-{base}"
    return f"backport-{pull_request_number}-to-{base}"


def get_backport_base_to_head(
    action: str | None,
    label: str | None,
    labels: list[str],
    pull_request_number: int,
    branch_name: str = "",
) -> dict[str, str]:
    """
    Map each base branch to the head branch its backport will be pushed to.

    Labels that do not match ``backport <base> [<head>]`` are ignored. When
    several labels name the same base, the last one wins.
    """
    base_to_head: dict[str, str] = {}
    for name in get_label_names(action, label, labels):
        match = LABEL_PATTERN.match(name)
        if match is None:
            continue
        base, head = match.groups()
        if head is None:
            head = default_head(base, pull_request_number, branch_name)
        if base in base_to_head:
            logger.debug(f"Label {name!r} overrides head {base_to_head[base]!r} for {base}")
        base_to_head[base] = head
    return base_to_head


def get_backport_targets(
    action: str | None,
    label: str | None,
    labels: list[str],
    pull_request_number: int,
    branch_name: str = "",
) -> list[BackportTarget]:
    base_to_head = get_backport_base_to_head(action, label, labels, pull_request_number, branch_name)
    return [BackportTarget(base, head) for base, head in base_to_head.items()]


def render_title(template: str, base: str, original_title: str) -> str:
    """Substitute every ``{{base}}`` and ``{{originalTitle}}`` in ``template``."""
    title = template
    for name, value in (("base", base), ("originalTitle", original_title)):
        title = title.replace("{{" + name + "}}", value)
    return title
