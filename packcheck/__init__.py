# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
packcheck: verification harness for cross-platform application packaging.

Drives a packaging pipeline, records every artifact it reports, then runs
exactly one platform validator (macOS bundle/dmg, Linux deb contents, or
Windows Squirrel installer set) over the collected files.
"""

__version__ = "0.1.0"
