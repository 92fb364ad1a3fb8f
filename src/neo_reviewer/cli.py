"""neo-reviewer CLI: the editor's bridge to git and GitHub.

Usage:
    neo-reviewer diff                            # working tree vs HEAD, as JSON
    neo-reviewer diff --base main --summary      # human summary instead
    neo-reviewer fetch --url URL                 # PR, files, comments, viewer
    neo-reviewer comment --url URL --path f.py --line 12 --body "nit"
    neo-reviewer comments --url URL              # existing review comments
    neo-reviewer reply --url URL --comment-id 7 --body "done"
    neo-reviewer edit --url URL --comment-id 7 --body "reworded"
    neo-reviewer delete --url URL --comment-id 7
    neo-reviewer submit --url URL --event APPROVE
    neo-reviewer auth                            # check the GitHub token
    neo-reviewer config                          # merged config with sources

Every command except auth, config and diff --summary prints one JSON
document on stdout. Logs go to stderr.
"""

import argparse
import json
import sys

import requests
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from neo_reviewer import __version__
from neo_reviewer.config import list_config, load_config
from neo_reviewer.git import GitError
from neo_reviewer.github.auth import AuthError
from neo_reviewer.github.client import REVIEW_EVENTS
from neo_reviewer.github.types import GitHubError, InvalidPrUrl
from neo_reviewer.log import enable_console_export, error, set_level

load_dotenv()

console = Console(highlight=False)

_EXPECTED_ERRORS = (GitError, GitHubError, AuthError, InvalidPrUrl, requests.RequestException)


def _emit(data: dict):
    """one JSON document on stdout."""
    print(json.dumps(data, ensure_ascii=False))


# ============================================================
# COMMANDS
# ============================================================

def cmd_diff(args, config):
    """Uncommitted changes against a base revision."""
    from neo_reviewer.commands import diff

    response = diff.get_local_diff(args.base, config=config)
    if args.summary:
        from neo_reviewer.review import format_diff_summary
        console.print(f"[bold]{escape(response.git_root)}[/bold]")
        console.print(format_diff_summary(response.files), markup=False)
        return 0
    _emit(response.to_dict())
    return 0


def cmd_fetch(args, config):
    """PR metadata, files with change blocks, comments, viewer."""
    from neo_reviewer.commands import fetch

    _emit(fetch.run(args.url, remote=args.remote, config=config))
    return 0


def cmd_comment(args, config):
    from neo_reviewer.commands import comment

    _emit(comment.run(
        args.url, args.path, args.line, args.side, args.body,
        start_line=args.start_line, start_side=args.start_side, config=config,
    ))
    return 0


def cmd_edit(args, config):
    from neo_reviewer.commands import comment

    _emit(comment.run_edit(args.url, args.comment_id, args.body, config=config))
    return 0


def cmd_delete(args, config):
    from neo_reviewer.commands import comment

    _emit(comment.run_delete(args.url, args.comment_id, config=config))
    return 0


def cmd_comments(args, config):
    from neo_reviewer.commands import comments

    _emit(comments.run(args.url, config=config))
    return 0


def cmd_reply(args, config):
    from neo_reviewer.commands import reply

    _emit(reply.run(args.url, args.comment_id, args.body, config=config))
    return 0


def cmd_submit(args, config):
    from neo_reviewer.commands import submit

    _emit(submit.run(args.url, args.event, args.body, config=config))
    return 0


def cmd_auth(args, config):
    """Exit 0 only when a token is found and GitHub accepts it."""
    from neo_reviewer.commands import auth

    status = auth.run(config=config)
    color = "green" if status.ok else "red"
    console.print(f"[{color}]{escape(str(status))}[/{color}]")
    return 0 if status.ok else 1


def cmd_config(args, config):
    for key, entry in list_config().items():
        console.print(f"  [bold]{key}[/bold] = {escape(repr(entry['value']))} [dim]({entry['source']})[/dim]")
    return 0


# ============================================================
# PARSERS
# ============================================================

def _add_url(p):
    p.add_argument("--url", "-u", required=True,
                   help="GitHub PR URL (e.g. https://github.com/owner/repo/pull/123)")


def _build_parsers(subparsers):
    p = subparsers.add_parser("diff", help="Review local changes against a base revision")
    p.add_argument("--base", "-b", default=None, help="Revision to diff against (default: HEAD)")
    p.add_argument("--summary", action="store_true", help="Print a human summary instead of JSON")
    p.set_defaults(func=cmd_diff)

    p = subparsers.add_parser("fetch", help="Fetch PR data including files, change blocks, comments")
    _add_url(p)
    p.add_argument("--remote", action="store_true",
                   help="Read changed files from the GitHub API instead of the local clone")
    p.set_defaults(func=cmd_fetch)

    p = subparsers.add_parser("comment", help="Add a review comment to a PR")
    _add_url(p)
    p.add_argument("--path", "-p", required=True, help="File path to comment on")
    p.add_argument("--line", "-l", type=int, required=True,
                   help="Line to comment on (end line for multi-line comments)")
    p.add_argument("--side", "-s", type=str.upper, default="RIGHT", choices=("LEFT", "RIGHT"),
                   help="Side of the diff (default: RIGHT)")
    p.add_argument("--body", "-b", required=True, help="Comment body")
    p.add_argument("--start-line", type=int, default=None, help="Start line for multi-line comments")
    p.add_argument("--start-side", type=str.upper, default=None, choices=("LEFT", "RIGHT"),
                   help="Start side for multi-line comments")
    p.set_defaults(func=cmd_comment)

    p = subparsers.add_parser("edit", help="Edit one of your review comments")
    _add_url(p)
    p.add_argument("--comment-id", "-c", type=int, required=True)
    p.add_argument("--body", "-b", required=True)
    p.set_defaults(func=cmd_edit)

    p = subparsers.add_parser("delete", help="Delete one of your review comments")
    _add_url(p)
    p.add_argument("--comment-id", "-c", type=int, required=True)
    p.set_defaults(func=cmd_delete)

    p = subparsers.add_parser("comments", help="Fetch existing review comments for a PR")
    _add_url(p)
    p.set_defaults(func=cmd_comments)

    p = subparsers.add_parser("reply", help="Reply to an existing comment")
    _add_url(p)
    p.add_argument("--comment-id", "-c", type=int, required=True, help="ID of the comment to reply to")
    p.add_argument("--body", "-b", required=True, help="Reply body")
    p.set_defaults(func=cmd_reply)

    p = subparsers.add_parser("submit", help="Submit a review (approve, request changes, comment)")
    _add_url(p)
    p.add_argument("--event", "-e", type=str.upper, required=True, choices=REVIEW_EVENTS,
                   help="Review event")
    p.add_argument("--body", "-b", default=None, help="Optional review message")
    p.set_defaults(func=cmd_submit)

    p = subparsers.add_parser("auth", help="Check authentication status")
    p.set_defaults(func=cmd_auth)

    p = subparsers.add_parser("config", help="Show merged configuration and where each value comes from")
    p.set_defaults(func=cmd_config)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="neo-reviewer",
        description="CLI tool for reviewing diffs and GitHub pull requests in Neovim",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--trace", action="store_true", help="Export spans to stderr")
    parser.add_argument("--log-level", default=None, choices=("debug", "info", "warn", "error"),
                        help="Log level for stderr (default: from config, warn)")
    subparsers = parser.add_subparsers(dest="command")
    _build_parsers(subparsers)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 2

    config = load_config()
    if args.log_level:
        config.set("log_level", args.log_level)
    set_level(config.get("log_level"))
    if args.trace:
        enable_console_export()

    try:
        return args.func(args, config)
    except _EXPECTED_ERRORS as exc:
        error("cli", f"{args.command} failed: {exc}")
        return 1


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
