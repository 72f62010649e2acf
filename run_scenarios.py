"""Convenience shim to run the example scenarios."""

from __future__ import annotations

import sys

from src.clubsearch.scenarios import main as scenarios_main


if __name__ == "__main__":
    sys.exit(scenarios_main(sys.argv[1:]))
