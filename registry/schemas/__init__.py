from .subscription import (
    RegisterResult,
    RegistrationPayload,
    SubscriptionRecord,
    SubscriptionResult,
    UnregisterResult,
)

__all__ = [
    "RegisterResult",
    "RegistrationPayload",
    "SubscriptionRecord",
    "SubscriptionResult",
    "UnregisterResult",
]
