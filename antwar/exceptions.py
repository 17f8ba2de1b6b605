"""
Exceptions - Errors that indicate a programming or configuration mistake.

Illegal player actions are NOT exceptions: the engine reports them as
ActionResult values carrying an ActionError (see antwar.actions). The classes
here are raised only when setup data is invalid or when a world invariant
would be broken, which means the caller bypassed the engine or the engine
itself has a bug.
"""

from typing import Optional


class AntwarError(Exception):
    """Base exception for all antwar errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self):
        if not self.context:
            return self.message
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} ({context_str})"


class ConfigError(AntwarError):
    """Game configuration or layout cannot produce a valid world."""
    pass


class WorldInvariantError(AntwarError):
    """A world mutation would break an occupancy or health invariant."""
    pass
