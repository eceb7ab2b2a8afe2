class LandoraAdminError(Exception):
    """Base class for admin gate errors."""


class DecodeError(LandoraAdminError):
    """Raised when a base64url token component cannot be decoded."""


class ConfigurationError(LandoraAdminError):
    """Raised when a required secret or setting is missing or unusable."""
