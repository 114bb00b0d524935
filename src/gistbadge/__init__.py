"""gistbadge: render shields.io badges and publish them to GitHub gists."""

__version__ = "1.0.0"
