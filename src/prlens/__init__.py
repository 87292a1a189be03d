"""prlens: diff preparation and comment rendering for a PR review bot."""

__version__ = "0.1.0"

__all__ = ["__version__"]
