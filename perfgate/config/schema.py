# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for perfgate.

Every config section gets its own frozen pydantic model. Goals are
loaded once per evaluation run and nothing downstream mutates them.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked
"""

import re
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


AggregationName = Literal["best", "median", "first"]

CONFIG_VERSION = "1.0.0"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def strip_regex_delimiters(pattern: str) -> str:
    """
    Turn a JS-style regex literal like "/main\\.\\w+\\.js/" into a bare pattern.

    The goals historically lived in package.json next to the webpack config,
    where patterns are written with slashes. Python's re module would treat
    those slashes as literal characters, so we drop them here.
    """
    if len(pattern) >= 2 and pattern.startswith("/") and pattern.endswith("/"):
        return pattern[1:-1]
    return pattern


class GlobalConfig(BaseModel):
    """Cross-cutting settings: identity and observability."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        default=CONFIG_VERSION,
        description="Schema version for compatibility tracking, e.g. '1.0.0'",
    )
    project_name: str = Field(
        default="perfgate", description="Human-readable project identifier"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )

    @field_validator("config_version")
    @classmethod
    def _major_version_is_supported(cls, value: str) -> str:
        supported = CONFIG_VERSION.split(".", 1)[0]
        if value.split(".", 1)[0] != supported:
            raise ValueError(
                f"config_version '{value}' is not supported, expected a {supported}.x version"
            )
        return value

    @field_validator("log_level")
    @classmethod
    def _log_level_is_known(cls, value: str) -> str:
        upper = value.upper()
        if upper not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{value}'"
            )
        return upper


class BundleBudget(BaseModel):
    """
    Size budget for the main JS bundle.

    It hangs off one score category (performance, by default). The summary
    shows it next to that category's scores.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    category: str = Field(
        default="performance",
        description="Score category this budget belongs to",
    )
    max_size_kb: float = Field(
        gt=0,
        description="Largest acceptable size of the matched bundle, in kilobytes",
    )
    name_pattern: str = Field(
        min_length=1,
        description="Regular expression matched against file names to find the bundle",
    )
    artifact_directory: str = Field(
        default="build/static/js",
        description="Where built output lives, relative to the working directory",
    )

    @field_validator("name_pattern")
    @classmethod
    def _pattern_must_compile(cls, value: str) -> str:
        pattern = strip_regex_delimiters(value)
        try:
            re.compile(pattern)
        except re.error as err:
            raise ValueError(f"name_pattern is not a valid regular expression: {err}") from err
        return pattern


class GoalsConfig(BaseModel):
    """
    The declared goals: minimum score per category plus the optional bundle budget.

    Scores are on the 0-100 scale used in the rendered summary, regardless
    of how the audit tool stores them in its reports.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    scores: dict[str, float] = Field(
        description="Category name mapped to the minimum acceptable score (0-100)",
    )
    bundle: Optional[BundleBudget] = Field(default=None)
    aggregation: AggregationName = Field(
        default="best",
        description="How repeated runs of one variant collapse into a single score",
    )

    @field_validator("scores")
    @classmethod
    def _scores_in_range(cls, value: dict[str, float]) -> dict[str, float]:
        if not value:
            raise ValueError("at least one category goal is required")
        for category, score in value.items():
            if not category.strip():
                raise ValueError("category names must not be empty")
            if not 0 <= score <= 100:
                raise ValueError(f"goal for '{category}' must be within 0-100, got {score}")
        return value

    @model_validator(mode="after")
    def _bundle_category_is_declared(self) -> "GoalsConfig":
        if self.bundle is not None and self.bundle.category not in self.scores:
            raise ValueError(
                f"bundle budget is attached to '{self.bundle.category}', "
                f"which has no score goal"
            )
        return self

    @property
    def categories(self) -> tuple[str, ...]:
        """Goal categories in a stable order."""
        return tuple(sorted(self.scores))


class ReportsConfig(BaseModel):
    """Where audit reports land and how they are grouped."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    directory: str = Field(
        default="reports",
        description="Directory holding one JSON report per audit run",
    )
    variants: list[str] = Field(
        default_factory=lambda: ["anonymous", "authenticated"],
        min_length=1,
        description="Filename prefixes that identify each testing condition",
    )
    link_base_url: Optional[str] = Field(
        default=None,
        description="Base URL where the HTML reports are published as build artifacts",
    )

    @field_validator("variants")
    @classmethod
    def _variants_are_unique(cls, value: list[str]) -> list[str]:
        if len(set(value)) != len(value):
            raise ValueError("variants must be unique")
        for variant in value:
            if not variant or "-" in variant:
                raise ValueError(f"invalid variant name '{variant}' (empty or contains '-')")
        return value


class NotifyConfig(BaseModel):
    """Settings for posting the summary as a pull-request comment."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    enabled: bool = Field(default=False)
    api_url: str = Field(default="https://api.github.com")
    repository: Optional[str] = Field(
        default=None,
        description="owner/name, used when the CI environment does not say",
    )
    token_env: str = Field(
        default="GITHUB_TOKEN",
        description="Environment variable holding the API token",
    )
    timeout_seconds: float = Field(default=10.0, gt=0, le=120)

    @field_validator("repository")
    @classmethod
    def _repository_shape(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value.count("/") != 1:
            raise ValueError(f"repository must look like 'owner/name', got '{value}'")
        return value


class OutputConfig(BaseModel):
    """Where the verdict and summary get written."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    directory: str = Field(default="perfgate-results")


class PerfGateConfig(BaseModel):
    """
    Top-level config container.

    `global` and `goals` are required; every other section has defaults that
    match the layout the audit jobs produce.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    goals: GoalsConfig
    reports: ReportsConfig = Field(default_factory=ReportsConfig)
    notify: NotifyConfig = Field(default_factory=NotifyConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
