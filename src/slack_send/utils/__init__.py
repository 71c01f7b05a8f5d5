"""
Module: utils
Description: Package initialization for utility functions.

This package contains shared helpers used throughout slack-send.

Current utilities:
- logger: Structured logging configuration and helpers
- actions: GitHub Actions runner toolkit
"""

__all__ = []
