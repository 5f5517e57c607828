#!/usr/bin/env python3
# /svim/main.py
"""
svim Main Entry Point
=====================

Runs the editor straight from a source checkout:
    python main.py [FILE]

Installed copies use the `svim` console script instead, which calls the
same `svim.app.start`.
"""

import os
import sys

# Ensure the 'svim' package under src/ is importable without installation.
project_src = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if project_src not in sys.path:
    sys.path.insert(0, project_src)

from svim.app import start  # noqa: E402


if __name__ == "__main__":
    start()
