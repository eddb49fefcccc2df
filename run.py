#!/usr/bin/env python3
"""Convenience runner for the Streetview Journey tool.

Usage:
    python run.py route.gpx --type hike
"""
import logging
import sys

from streetview_journey.main import main

if __name__ == "__main__":
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    sys.exit(main())
