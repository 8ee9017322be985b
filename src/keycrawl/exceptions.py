class KeycrawlError(Exception):
    """Base exception for the Keycrawl project."""


class ConfigError(KeycrawlError):
    """Raised when settings are invalid (e.g., a critical path longer than the grid)."""


class GenerationError(KeycrawlError):
    """Raised when dungeon generation cannot proceed or produced an invalid tree."""


class KeyPlacementError(GenerationError):
    """Raised when a key/lock pair cannot be placed on the requested rooms."""
