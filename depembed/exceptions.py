"""Custom exceptions for depembed."""


class EmbedError(Exception):
    """Base exception for all dependency embedding errors."""


class ConfigurationError(EmbedError):
    """Raised when embed instructions are malformed or use an unknown attribute."""

    def __init__(self, message: str, attribute: str | None = None):
        self.attribute = attribute
        super().__init__(message)


class VersionResolutionError(EmbedError):
    """Raised when a dependency's selected version cannot be determined."""


class DescriptorError(EmbedError):
    """Raised when a build descriptor cannot be read or validated."""
