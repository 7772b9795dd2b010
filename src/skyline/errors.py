"""Error types raised by the skyline geometry pipeline."""


class SkylineError(Exception):
    """Base exception for skyline generation errors."""
    pass


class ConfigError(SkylineError, ValueError):
    """Invalid generator configuration (non-positive scale, depth, ...)."""
    pass


class FontError(SkylineError):
    """No usable font could be loaded for text extrusion."""
    pass


class ImageDecodeError(SkylineError, OSError):
    """Relief source image is missing, unreadable or unsupported."""
    pass
