"""Module entry point for running with python -m granola2md."""

import sys

from granola2md.cli import main

if __name__ == "__main__":
    sys.exit(main())
