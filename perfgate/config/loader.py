# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Config loader: reads YAML or JSON from disk and produces validated, frozen models.

The loading pipeline is linear:
  1. Read raw text from the file
  2. Parse into a plain dict: JSON for .json files (package.json), YAML otherwise
  3. Hand the dict to pydantic for schema validation
  4. Return the frozen, immutable model

If anything goes wrong at any step, we fail immediately with a clear error.
There is no retry logic, no fallback defaults, no recovery. A goals section
with a missing score must stop the run, not quietly pass it.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from perfgate.config.exceptions import ConfigLoadError, ConfigValidationError
from perfgate.config.schema import GoalsConfig, PerfGateConfig

# package.json "lighthouse" sections predate the YAML schema. These keys are
# translated into their GoalsConfig equivalents.
_LEGACY_SCORES_KEY = "requiredScores"
_LEGACY_BUNDLE_SIZE_KEY = "maxBundleSizeKb"
_LEGACY_BUNDLE_REGEX_KEY = "jsBundleRegex"
_LEGACY_KEYS = frozenset({_LEGACY_SCORES_KEY, _LEGACY_BUNDLE_SIZE_KEY, _LEGACY_BUNDLE_REGEX_KEY})


def _read_config_file(config_path: Path) -> dict[str, Any]:
    """
    Read a YAML or JSON file and return the parsed dict.

    Files ending in .json go through the json module. PyYAML rejects some
    valid JSON, such as tab-indented package.json files.

    We explicitly check for file existence and readability before parsing,
    because yaml.safe_load gives cryptic errors on missing files.

    Raises:
        ConfigLoadError: If the file doesn't exist, isn't readable, or isn't valid YAML/JSON.
    """
    if not config_path.exists():
        raise ConfigLoadError(f"Config file not found: {config_path}")

    if not config_path.is_file():
        raise ConfigLoadError(f"Config path is not a file: {config_path}")

    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err

    if config_path.suffix.lower() == ".json":
        try:
            parsed = json.loads(raw_text)
        except ValueError as err:
            raise ConfigLoadError(f"Invalid JSON in {config_path}: {err}") from err
    else:
        try:
            parsed = yaml.safe_load(raw_text)
        except yaml.YAMLError as err:
            raise ConfigLoadError(f"Invalid YAML in {config_path}: {err}") from err

    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"Config file must contain a mapping (dict), got {type(parsed).__name__}"
        )

    return parsed


def load_config(config_path: Path) -> PerfGateConfig:
    """
    Load, validate, and freeze a config file into a PerfGateConfig object.

    Args:
        config_path: Path to a YAML config file.

    Returns:
        A fully validated, frozen PerfGateConfig instance.

    Raises:
        ConfigLoadError: File I/O or YAML parse failures.
        ConfigValidationError: Schema violations (missing fields, wrong types, unknown keys).
    """
    raw_data = _read_config_file(config_path)

    try:
        config = PerfGateConfig.model_validate(raw_data)
    except ValidationError as err:
        raise ConfigValidationError(
            f"Config validation failed for {config_path}:\n{err}"
        ) from err

    return config


def _translate_legacy_goals(raw: Mapping[str, Any]) -> dict[str, Any]:
    """
    Map a package.json style section onto the GoalsConfig field names.

    The budget is only emitted when a size is given; a regex without a size
    (or the reverse) is left for pydantic to reject as an incomplete budget.
    """
    unknown = set(raw) - _LEGACY_KEYS
    if unknown:
        raise ConfigValidationError(
            f"Unknown keys in goals declaration: {', '.join(sorted(unknown))}"
        )

    translated: dict[str, Any] = {"scores": raw.get(_LEGACY_SCORES_KEY)}
    size = raw.get(_LEGACY_BUNDLE_SIZE_KEY)
    pattern = raw.get(_LEGACY_BUNDLE_REGEX_KEY)
    if size is not None or pattern is not None:
        translated["bundle"] = {"max_size_kb": size, "name_pattern": pattern}
    return translated


def load_goals(config: Union[PerfGateConfig, Mapping[str, Any]]) -> GoalsConfig:
    """
    Parse a goals declaration into a frozen GoalsConfig.

    Accepts an already-loaded PerfGateConfig (its goals section is returned
    as-is) or a raw mapping in either the native schema or the package.json
    layout (requiredScores / maxBundleSizeKb / jsBundleRegex).

    Raises:
        ConfigValidationError: If required fields are absent or malformed.
    """
    if isinstance(config, PerfGateConfig):
        return config.goals

    if not isinstance(config, Mapping):
        raise ConfigValidationError(
            f"Goals declaration must be a mapping, got {type(config).__name__}"
        )

    raw: Mapping[str, Any] = config
    if any(key in raw for key in _LEGACY_KEYS):
        raw = _translate_legacy_goals(raw)

    try:
        return GoalsConfig.model_validate(dict(raw))
    except ValidationError as err:
        raise ConfigValidationError(f"Goals declaration is invalid:\n{err}") from err


def load_goals_file(path: Path, section: Optional[str] = None) -> GoalsConfig:
    """
    Read goals from a YAML or JSON file, optionally from a nested section.

    `section` is a dotted path, so `lighthouse` picks package.json's
    top-level "lighthouse" key and `goals` picks the section of a perfgate
    config file.
    """
    raw: Any = _read_config_file(path)

    if section:
        for key in section.split("."):
            if not isinstance(raw, Mapping) or key not in raw:
                raise ConfigValidationError(f"Section '{section}' not found in {path}")
            raw = raw[key]

    return load_goals(raw)
