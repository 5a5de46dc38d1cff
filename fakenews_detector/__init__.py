"""Top-level package for the fake-news credibility detector.

This package contains the analysis core (rule-based signal scorers, the AI
judgment wrapper, result caching and rate limiting) and a small CLI that
drives it.
"""

__all__ = []
