# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
perfgate evaluation package: the score evaluator.

Subsystems:
  - reports: finding, parsing and grouping audit reports by variant
  - aggregate: collapsing repeated runs into one score per category
  - bundle: measuring the built JS bundle against its size budget
  - evaluator: comparing everything against the goals and deciding pass/fail
"""
