"""
Exception hierarchy for romart.

Provides a standardized exception hierarchy for consistent error handling
across the application. All exceptions inherit from RomArtException.
"""


class RomArtException(Exception):
    """Base exception for all romart errors."""
    pass


class ValidationException(RomArtException):
    """Input validation failed."""

    def __init__(self, message: str, field: str = None):
        """
        Initialize validation exception.

        Args:
            message: Validation error message
            field: Field that failed validation (optional)
        """
        self.field = field
        if field:
            super().__init__(f"Validation failed for {field}: {message}")
        else:
            super().__init__(f"Validation failed: {message}")


class IntegrationException(RomArtException):
    """External integration/API failed."""

    def __init__(self, service: str, reason: str):
        """
        Initialize integration exception.

        Args:
            service: Service name that failed
            reason: Reason for failure
        """
        self.service = service
        self.reason = reason
        super().__init__(f"{service} integration failed: {reason}")


class ConfigurationException(RomArtException):
    """Configuration is invalid or missing."""
    pass


class UnknownPlatformException(ConfigurationException):
    """A platform id is not registered in the platform catalog."""

    def __init__(self, platform: str):
        """
        Initialize unknown platform exception.

        Args:
            platform: Platform id that could not be found
        """
        self.platform = platform
        super().__init__(f"Unknown platform: {platform}")


__all__ = [
    "RomArtException",
    "ValidationException",
    "IntegrationException",
    "ConfigurationException",
    "UnknownPlatformException",
]
