"""Convenience shim to run the demo sequence."""

from __future__ import annotations

import sys

from src.clubsearch.runner import main as demo_main


if __name__ == "__main__":
    sys.exit(demo_main(sys.argv[1:]))
