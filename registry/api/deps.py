from fastapi import Request

from registry.core.errors import AuthorizationError
from registry.services.subscription_store import SubscriptionStore


def get_store(request: Request) -> SubscriptionStore:
    return request.app.state.store


def require_admin(request: Request) -> None:
    """GET /subscriptions: admin secret (yapılandırılmışsa)."""
    if not request.app.state.admin_authorizer.authorize(request):
        raise AuthorizationError()


def require_client(request: Request) -> None:
    """POST/DELETE /subscriptions: istemci secret (yapılandırılmışsa)."""
    if not request.app.state.client_authorizer.authorize(request):
        raise AuthorizationError()
