"""
Backport a merged GitHub PR to the branches named by its backport labels.

Usage (normally run by a workflow on ``pull_request`` closed/labeled events):
    autobackport --event $GITHUB_EVENT_PATH --token $GITHUB_TOKEN

Inputs default to the ``INPUT_*`` variables set by the Actions runner, so the
same command works as an action step with no arguments.
"""

import argparse
import json
import logging
import os
import sys

from github import GithubException

from autobackport.backport import backport
from autobackport.errors import BackportError, ConfigurationError
from autobackport.event import PullRequestEvent, load_payload
from autobackport.inputs import (
    DEFAULT_TITLE_TEMPLATE,
    BackportConfiguration,
    get_files_to_skip,
    get_input,
    get_labels_to_add,
    parse_bool,
)
from autobackport.log import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Backport a merged GitHub PR to the branches named by its backport labels.",
        epilog="Example: autobackport --event event.json --files-to-skip CHANGELOG.md --add-labels backport",
    )
    parser.add_argument(
        "--event",
        default=os.environ.get("GITHUB_EVENT_PATH"),
        help="Path to the pull_request event JSON (default: GITHUB_EVENT_PATH env var)",
    )
    parser.add_argument(
        "--token",
        default=get_input("github_token") or os.environ.get("GITHUB_TOKEN"),
        help="GitHub token for API access and pushing (default: github_token input or GITHUB_TOKEN env var)",
    )
    parser.add_argument(
        "--title-template",
        default=get_input("title_template") or DEFAULT_TITLE_TEMPLATE,
        help="Title of the backport PR; {{base}} and {{originalTitle}} are substituted",
    )
    parser.add_argument(
        "--branch-name",
        default=get_input("branch_name"),
        help="Prefix of the backport branch name, <prefix>-to-<base> (default: backport-<PR number>)",
    )
    parser.add_argument(
        "--delete-branch",
        action="store_true",
        default=parse_bool(get_input("delete-branch")),
        help="Delete the backport branch once its PR is merged",
    )
    parser.add_argument(
        "--add-labels",
        default=get_input("add_labels"),
        help="Comma-separated labels to add to the backport PR",
    )
    parser.add_argument(
        "--files-to-skip",
        default=get_input("files_to_skip"),
        help="Comma-separated paths whose changes are left out of the backport",
    )
    parser.add_argument(
        "-C", "--repo-dir",
        dest="repo_dir",
        help="Use existing repo directory instead of cloning",
    )
    parser.add_argument(
        "--work-dir",
        help="Directory to clone into when not using -C (default: temp dir)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log git commands and the event payload",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        if not args.token:
            raise ConfigurationError("Input required and not supplied: github_token")
        config = BackportConfiguration(
            token=args.token,
            title_template=args.title_template,
            branch_name=args.branch_name,
            delete_branch=args.delete_branch,
            files_to_skip=tuple(get_files_to_skip(args.files_to_skip)),
            labels_to_add=tuple(get_labels_to_add(args.add_labels)),
        )
        payload = load_payload(args.event)
        logger.debug(json.dumps(payload, indent=2))
        event = PullRequestEvent.from_payload(payload)
        results = backport(config, event, repo_dir=args.repo_dir, work_dir=args.work_dir)
    except (BackportError, GithubException) as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected {type(e).__name__}: {e}")
        sys.exit(1)

    for result in results:
        if result.succeeded:
            logger.info(f"Backported to {result.base} in #{result.pull_request_number}")
        else:
            logger.info(f"Backport to {result.base} failed, instructions posted on #{event.number}")


if __name__ == "__main__":
    main()
