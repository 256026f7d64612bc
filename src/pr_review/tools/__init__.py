"""GitHub adapters for the review pipeline."""

from . import github_tools

__all__ = ["github_tools"]
