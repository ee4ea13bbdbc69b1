from .config import Settings, settings
from .errors import AuthorizationError, PersistenceError, RegistryError, ValidationError

__all__ = [
    "AuthorizationError",
    "PersistenceError",
    "RegistryError",
    "Settings",
    "ValidationError",
    "settings",
]
