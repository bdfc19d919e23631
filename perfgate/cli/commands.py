# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the perfgate CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code from perfgate.cli.exit_codes. Diagnostics go through the structured
logger (stderr); the only thing written to stdout is the rendered summary.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from perfgate.cli.exit_codes import (
    CONFIG_ERROR,
    GOALS_NOT_MET,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from perfgate.config.exceptions import ConfigError
from perfgate.config.loader import load_config, load_goals_file
from perfgate.config.schema import GoalsConfig, NotifyConfig, PerfGateConfig
from perfgate.evaluation.evaluator import run_evaluation
from perfgate.evaluation.exceptions import EvaluationError
from perfgate.logging.logger import configure_logging, get_logger
from perfgate.notify.github import NotifyError, post_comment, resolve_pull_request
from perfgate.reporting.summary import build_report_links, render_error_summary, render_summary
from perfgate.reporting.writer import write_verdict
from perfgate.utils.filesystem import safe_read


def _load_and_configure(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, Optional[PerfGateConfig], logging.Logger]:
    """
    The shared setup every command needs: logging first, then config.

    The --log-level flag wins over the config's log_level; the config's
    log_file is honoured either way. Returns (exit_code, config, logger); if
    exit_code is not SUCCESS the caller should return it immediately.
    """
    configure_logging(args.log_level or "INFO")
    logger = get_logger(f"perfgate.cli.{command_name}")

    config = None
    if args.config is not None:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, None, logger

        global_config = config.global_config
        configure_logging(
            args.log_level or global_config.log_level,
            Path(global_config.log_file) if global_config.log_file else None,
        )
    else:
        logger.debug(
            "No config provided, running with defaults",
            extra={"command": command_name},
        )

    return SUCCESS, config, logger


def _resolve_goals(
    args: argparse.Namespace,
    config: Optional[PerfGateConfig],
) -> Optional[GoalsConfig]:
    """Goals from --goals-file when given, else from the config, else None."""
    goals: Optional[GoalsConfig] = None
    if args.goals_file is not None:
        goals = load_goals_file(Path(args.goals_file), section=args.goals_section)
    elif config is not None:
        goals = config.goals

    if goals is not None and getattr(args, "aggregation", None):
        goals = goals.model_copy(update={"aggregation": args.aggregation})
    return goals


def _default_config(goals: GoalsConfig) -> PerfGateConfig:
    """A config with every section at its defaults, for runs driven purely by flags."""
    return PerfGateConfig.model_validate({
        "global": {},
        "goals": goals.model_dump(),
    })


def _post_summary(
    notify: NotifyConfig,
    summary: str,
    logger: logging.Logger,
) -> int:
    """Post the summary to the current pull request, if there is one."""
    ref = resolve_pull_request(os.environ, notify.repository)
    if ref is None:
        logger.info("No pull request for this build, nothing to post")
        return SUCCESS

    try:
        post_comment(
            ref,
            summary,
            token=os.environ.get(notify.token_env, ""),
            api_url=notify.api_url,
            timeout=notify.timeout_seconds,
        )
    except NotifyError as err:
        logger.error(
            "Failed to post summary",
            extra={"error": str(err), "number": ref.number},
        )
        return RUNTIME_ERROR
    return SUCCESS


def _report_failure(
    err: Exception,
    exit_code: int,
    config: Optional[PerfGateConfig],
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    """Print and (optionally) post the error summary, then hand back the exit code."""
    summary = render_error_summary(err)
    sys.stdout.write(summary)
    if config is not None and config.notify.enabled and not args.no_notify and not args.dry_run:
        _post_summary(config.notify, summary, logger)
    return exit_code


def handle_evaluate(args: argparse.Namespace) -> int:
    """Load goals and reports, decide pass/fail, print and persist the summary."""
    exit_code, config, logger = _load_and_configure(args, "evaluate")
    if exit_code != SUCCESS:
        return exit_code

    try:
        goals = _resolve_goals(args, config)
        if goals is None:
            logger.error(
                "No goals to evaluate against; pass --config or --goals-file",
                extra={"command": "evaluate"},
            )
            return USER_ERROR

        if config is None:
            config = _default_config(goals)

        logger.info(
            "Starting evaluation",
            extra={
                "command": "evaluate",
                "categories": list(goals.categories),
                "aggregation": goals.aggregation,
                "dry_run": args.dry_run,
            },
        )

        verdict, reports = run_evaluation(
            config,
            reports_directory=Path(args.reports_dir) if args.reports_dir else None,
            artifact_directory=Path(args.artifact_dir) if args.artifact_dir else None,
            goals=goals,
        )

    except ConfigError as err:
        logger.error("Configuration error", extra={"command": "evaluate", "error": str(err)})
        return _report_failure(err, CONFIG_ERROR, config, args, logger)
    except EvaluationError as err:
        logger.error(
            "Evaluation input error",
            extra={"command": "evaluate", "error": str(err), "kind": type(err).__name__},
        )
        return _report_failure(err, VALIDATION_ERROR, config, args, logger)
    except Exception as err:
        logger.error("Evaluation failed", extra={"error": str(err)}, exc_info=True)
        return _report_failure(err, RUNTIME_ERROR, config, args, logger)

    links = build_report_links(reports, args.link_base_url or config.reports.link_base_url)
    summary = render_summary(verdict, links)
    sys.stdout.write(summary)

    if args.dry_run:
        logger.info("Dry run, not writing results or posting the summary")
    else:
        output_dir = Path(args.output_dir or config.output.directory)
        try:
            write_verdict(verdict, summary, output_dir)
        except OSError as err:
            logger.error(
                "Failed to write results",
                extra={"output_dir": str(output_dir), "error": str(err)},
            )
            return RUNTIME_ERROR

        if config.notify.enabled and not args.no_notify:
            # Notify failures never change the exit code.
            _post_summary(config.notify, summary, logger)

    return SUCCESS if verdict.passed else GOALS_NOT_MET


def handle_check_config(args: argparse.Namespace) -> int:
    """Validate the config (and goals file, if given) without touching any reports."""
    exit_code, config, logger = _load_and_configure(args, "check-config")
    if exit_code != SUCCESS:
        return exit_code

    try:
        goals = _resolve_goals(args, config)
    except ConfigError as err:
        logger.error("Configuration error", extra={"command": "check-config", "error": str(err)})
        return CONFIG_ERROR

    if goals is None:
        logger.error("Nothing to check; pass --config or --goals-file")
        return USER_ERROR

    logger.info(
        "Configuration is valid",
        extra={
            "goals": dict(goals.scores),
            "aggregation": goals.aggregation,
            "bundle_max_kb": goals.bundle.max_size_kb if goals.bundle else None,
            "bundle_pattern": goals.bundle.name_pattern if goals.bundle else None,
        },
    )
    return SUCCESS


def handle_notify(args: argparse.Namespace) -> int:
    """Post a previously rendered summary file to the current pull request."""
    exit_code, config, logger = _load_and_configure(args, "notify")
    if exit_code != SUCCESS:
        return exit_code

    try:
        summary = safe_read(Path(args.summary))
    except OSError as err:
        logger.error("Cannot read summary", extra={"path": args.summary, "error": str(err)})
        return USER_ERROR

    notify = config.notify if config is not None else NotifyConfig()

    if args.dry_run:
        logger.info(
            "Dry run, would post summary",
            extra={"chars": len(summary), "api_url": notify.api_url},
        )
        return SUCCESS

    return _post_summary(notify, summary, logger)
