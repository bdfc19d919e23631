# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Data errors raised while evaluating audit results.

These are infrastructure/data failures, not failed goals. A score below its
goal is a normal verdict; these abort the run.
"""


class EvaluationError(Exception):
    """Base for all evaluation input errors."""


class ReportLoadError(EvaluationError):
    """
    Raised when a report file is unreadable, unparsable, missing a goal
    category, or when a declared variant has no reports at all.
    """


class ArtifactNotFoundError(EvaluationError):
    """Raised when no build artifact matches the configured bundle pattern."""
