"""AI pull request reviewer: interprets model reviews and posts them to GitHub."""

__version__ = "0.1.0"
