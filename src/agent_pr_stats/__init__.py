"""Agent PR Stats - pull request analytics for automated coding agents."""

__version__ = "0.1.0"
