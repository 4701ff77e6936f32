"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

import logging


class LogLevel:
    """Log level constants with numeric values for comparison.

    Values match the standard logging module: DEBUG < INFO < WARNING < ERROR.
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)

    @classmethod
    def normalize(cls, level: int) -> int:
        """Clamp an arbitrary logging level onto the four panel levels."""
        if level >= cls.ERROR:
            return cls.ERROR
        if level >= cls.WARNING:
            return cls.WARNING
        if level >= cls.INFO:
            return cls.INFO
        return cls.DEBUG


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Asset gallery configuration
GALLERY_MIN_SLOTS = 12  # Empty slots pad the grid up to this many cards
ASSET_NAME_MAX_LENGTH = 24  # Characters before truncating card names

# Viewport configuration
VIEWPORT_RESOLUTIONS = [
    ("1920x1080 (16:9)", "1920x1080"),
    ("1280x720 (16:9)", "1280x720"),
    ("1080x1920 (9:16)", "1080x1920"),
    ("Free Aspect", "free"),
]
VIEWPORT_DEFAULT_RESOLUTION = "1920x1080"

# Header badge labels for the code model
PROVIDER_BADGES = {
    "gemini": "Gemini 3 Pro",
}

# Loggers whose records are mirrored into the log panel
PANEL_LOGGER_NAME = "gamegen"
