#!/usr/bin/env python3
"""
Build public/data.json from the Federal Register API.

Examples:
  # Write the default snapshot (EO_SNAPSHOT_PATH)
  python scripts/build_snapshot.py

  # Write somewhere else
  python scripts/build_snapshot.py --output /tmp/data.json
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
from eotracker.builder import main

if __name__ == "__main__":
    exit(main())
