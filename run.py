#!/usr/bin/env python3
"""
run.py - Main entry point for gravity-flip Connect Four
"""

import sys

from gravity4.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
