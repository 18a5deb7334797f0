"""
Exceptions raised by the mining engine.

Both subclass ValueError so callers that already guard parameter
errors with ``except ValueError`` keep working.
"""


class ConfigurationError(ValueError):
    """Invalid mining parameter (support, confidence, max_len, measure name, ...)."""


class EmptyDatasetError(ValueError):
    """The transaction database has no transactions or only empty ones."""
