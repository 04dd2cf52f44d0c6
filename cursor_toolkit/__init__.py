"""
Cursor Toolkit — copy ~/.cursor tooling into projects and publish them to GitHub.
"""

__version__ = "0.1.0"
