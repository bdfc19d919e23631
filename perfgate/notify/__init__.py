# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Posting the rendered summary back to the change under review."""
