#!/usr/bin/env python3
"""CLI entry point for the bibads command.

Builds the bibliography of a LaTeX file from NASA ADS.
"""

import sys


def main() -> None:
    """Entry point for bibads command."""
    from bibads.app import main as app_main

    sys.exit(app_main())


if __name__ == "__main__":
    main()
