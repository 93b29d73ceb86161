"""Entry point for running bbfilter as a module.

This allows the package to be executed as:
    python -m bbfilter [arguments]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
