"""
Engine error types.

All of them derive from ValueError: each one signals input the engine cannot
turn into a meaningful number.
"""


class ConfigurationError(ValueError):
    """Unknown phytoplankton group key."""


class InsufficientDataError(ValueError):
    """Not enough observations for the requested computation."""


class DegenerateInputError(ValueError):
    """Input matrix on which PCA is undefined (too small, ragged, zero variance)."""
