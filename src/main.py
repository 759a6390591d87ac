"""
Main entry point for running shall from a source checkout.
"""

import sys

from cli.main import main

if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
