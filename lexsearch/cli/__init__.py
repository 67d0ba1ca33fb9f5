"""lexsearch command-line interface.

Built with Click and Rich.
"""

from lexsearch.cli.main import cli

__all__ = ["cli"]
