"""
Entry point for running pdef as a module.

Usage:
    python -m pdef parse input.pdef
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
