"""Error kinds raised by the image -> ASCII pipeline.

Every failure is terminal: the CLI reports the message and exits with 1.
"""


class AsciiImageError(Exception):
    """Base class for every failure of the conversion run."""


class ConfigError(AsciiImageError):
    """Missing or invalid command line value."""


class DecodeError(AsciiImageError):
    """Input file missing, unreadable or not a recognized image."""


class WriteError(AsciiImageError):
    """Output file could not be created or written."""


class EncodeError(AsciiImageError):
    """Rendered image could not be serialized."""
