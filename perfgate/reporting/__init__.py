# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Rendering and persisting verdicts: the review comment and the verdict files."""
