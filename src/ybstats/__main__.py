"""Entry point for ``python -m ybstats``."""

from ybstats.cli import main

main()
