# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Custom exceptions for the configuration system.

We keep these separate so that CLI and other layers can catch config-specific
failures without importing the entire config machinery.
"""


class ConfigError(Exception):
    """Base for all configuration errors, including a malformed goals declaration."""


class ConfigLoadError(ConfigError):
    """Raised when a config file cannot be read from disk or parsed."""


class ConfigValidationError(ConfigError):
    """
    Raised when a config file parses fine but fails schema validation.
    This covers missing goal scores, out-of-range values, bad bundle
    patterns, unknown keys and any other structural problem.
    """
