# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for perfgate.

This is the single root command. Every operation is a subcommand of
`perfgate`. No interactive prompts: this runs inside CI jobs.

The global options (--config, --log-level, --dry-run) are inherited by every
subcommand through argparse's parent parser mechanism.

Usage:
    perfgate evaluate --config perfgate.yaml
    perfgate evaluate --goals-file package.json --goals-section lighthouse --reports-dir reports
    perfgate check-config --config perfgate.yaml
    perfgate notify --summary perfgate-results/summary.md
"""

import argparse
import sys

from perfgate.cli.commands import handle_check_config, handle_evaluate, handle_notify
from perfgate.cli.exit_codes import USER_ERROR


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    We use a separate parent parser (with add_help=False) so that help text
    doesn't collide between the parent and the subcommand parsers.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides the config).",
    )
    parent.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Evaluate and print, but write no files and post nothing.",
    )
    return parent


def _add_goals_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--goals-file",
        type=str,
        default=None,
        dest="goals_file",
        help="Read goals from this YAML/JSON file instead of the config (e.g. package.json).",
    )
    parser.add_argument(
        "--goals-section",
        type=str,
        default=None,
        dest="goals_section",
        help="Dotted key inside --goals-file holding the goals (e.g. 'lighthouse').",
    )


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """Register every subcommand with its handler via set_defaults(func=...)."""
    evaluate = subparsers.add_parser(
        "evaluate",
        parents=[parent],
        help="Compare audit reports against goals and decide pass/fail.",
    )
    evaluate.set_defaults(func=handle_evaluate)
    _add_goals_options(evaluate)
    evaluate.add_argument(
        "--reports-dir",
        type=str,
        default=None,
        dest="reports_dir",
        help="Directory holding the audit reports (overrides reports.directory).",
    )
    evaluate.add_argument(
        "--artifact-dir",
        type=str,
        default=None,
        dest="artifact_dir",
        help="Directory holding the built bundle (overrides goals.bundle.artifact_directory).",
    )
    evaluate.add_argument(
        "--output-dir",
        type=str,
        default=None,
        dest="output_dir",
        help="Where verdict.json and summary.md are written (overrides output.directory).",
    )
    evaluate.add_argument(
        "--aggregation",
        type=str,
        default=None,
        choices=["best", "median", "first"],
        help="How repeated runs are combined (overrides goals.aggregation).",
    )
    evaluate.add_argument(
        "--link-base-url",
        type=str,
        default=None,
        dest="link_base_url",
        help="Base URL of the published HTML reports (overrides reports.link_base_url).",
    )
    evaluate.add_argument(
        "--no-notify",
        action="store_true",
        default=False,
        dest="no_notify",
        help="Do not post the summary even if notify.enabled is set.",
    )

    check = subparsers.add_parser(
        "check-config",
        parents=[parent],
        help="Validate the configuration and goals.",
    )
    check.set_defaults(func=handle_check_config)
    _add_goals_options(check)

    notify = subparsers.add_parser(
        "notify",
        parents=[parent],
        help="Post a rendered summary to the current pull request.",
    )
    notify.set_defaults(func=handle_notify)
    notify.add_argument(
        "--summary",
        type=str,
        required=True,
        help="Path to the summary Markdown file to post.",
    )


def build_parser() -> argparse.ArgumentParser:
    """The root `perfgate` parser with every subcommand registered."""
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="perfgate",
        description="perfgate: gate deployments on performance-audit scores.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)
    return root_parser


def main() -> None:
    """
    Main CLI entrypoint. This is what pyproject.toml's [project.scripts] points to.

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    root_parser = build_parser()
    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
