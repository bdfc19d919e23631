# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI exit codes.

The pipeline gates on these, so they are the only exit codes perfgate uses.
Anything non-zero fails the CI job; the value tells you why.
"""

SUCCESS: int = 0
USER_ERROR: int = 1
CONFIG_ERROR: int = 2
RUNTIME_ERROR: int = 3
VALIDATION_ERROR: int = 4
GOALS_NOT_MET: int = 5
