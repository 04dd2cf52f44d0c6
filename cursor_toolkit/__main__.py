"""
Run the toolkit CLI directly.

Usage:
    python -m cursor_toolkit bootstrap
    python -m cursor_toolkit commit
"""

from .main import cli

if __name__ == "__main__":
    cli()
