class CryptwalkError(Exception):
    """Base error for cryptwalk world generation."""


class ConfigError(CryptwalkError):
    """Raised when a configuration value is missing or malformed."""


class GenerationError(CryptwalkError):
    """Raised when a generator is asked for something it cannot build."""


class NoFloorTileError(GenerationError):
    """Raised when random floor sampling exhausts its try budget."""
