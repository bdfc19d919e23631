# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

from perfgate.cli.main import main

main()
