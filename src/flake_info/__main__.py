"""Entry point for running flake-info as a module.

Allows the package to be run as:
    python -m flake_info
"""

import sys

from flake_info.cli import main

if __name__ == "__main__":
    sys.exit(main())
