"""
tetherio - Main entry point

Allows running the command line interface with ``python -m tetherio``.
"""

from .cli import cli

if __name__ == "__main__":
    cli()
