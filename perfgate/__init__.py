# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
perfgate: gate a deploy pipeline on performance-audit scores.

Audit runs drop report files into a directory, perfgate aggregates them per
variant, compares them against declared goals, checks the JS bundle budget
and hands back a verdict plus a summary ready to post on the pull request.
"""

__version__ = "1.0.0"
