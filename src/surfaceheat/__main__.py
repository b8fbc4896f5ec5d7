"""Command-line interface."""
import sys

from surfaceheat.main import main

if __name__ == "__main__":
    sys.exit(main())
