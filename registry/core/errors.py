"""Registry hata hiyerarşisi; her sınıf HTTP durum kodunu taşır."""


class RegistryError(Exception):
    """Base exception for all registry errors."""

    status_code = 500


class ValidationError(RegistryError):
    """Missing or malformed request data."""

    status_code = 400


class AuthorizationError(RegistryError):
    """Missing or incorrect bearer secret."""

    status_code = 401

    def __init__(self, message: str = "Invalid or missing authorization token.") -> None:
        super().__init__(message)


class PersistenceError(RegistryError):
    """Backing file could not be read, parsed or written."""

    status_code = 500
