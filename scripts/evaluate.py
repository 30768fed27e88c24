#!/usr/bin/env python3
"""Build TREC runs from the search service and score them with trec_eval."""
from __future__ import annotations

import sys
from pathlib import Path

# Allow running from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.trecrun.cli import main

if __name__ == "__main__":
    sys.exit(main())
