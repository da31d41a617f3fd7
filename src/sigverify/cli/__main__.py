"""CLI entry point for sigverify.cli module.

Enables execution via: python -m sigverify.cli
"""

import sys

from sigverify.cli.commands import main


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
