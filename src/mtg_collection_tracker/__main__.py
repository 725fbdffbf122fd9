"""Main entry point for the MTG Card Collection Tracker."""

import sys

from mtg_collection_tracker.cli import main

if __name__ == "__main__":
    sys.exit(main())
