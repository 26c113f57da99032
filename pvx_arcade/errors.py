"""
Exception types raised by the PixelVault arcade engine.

Only construction-time and argument errors are raised here. Hashing and
drawing failures come from their collaborators and propagate unchanged.
"""


class PixelVaultError(Exception):
    """Base class for every error raised by pvx_arcade."""


class InvalidArgument(PixelVaultError, ValueError):
    """An argument is outside its documented domain (e.g. difficulty < 1)."""


class SessionNotStarted(PixelVaultError, RuntimeError):
    """Input was submitted to a game before init() was called."""
