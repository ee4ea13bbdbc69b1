"""Bearer secret doğrulama; admin ve istemci kapıları için değiştirilebilir strateji."""
import hmac
from typing import Protocol

from fastapi import Request

BEARER_PREFIX = "Bearer "


class Authorizer(Protocol):
    def authorize(self, request: Request) -> bool: ...


class AllowAllAuthorizer:
    """Secret yapılandırılmamışsa kapı açıktır (yerel/dev ortamı)."""

    def authorize(self, request: Request) -> bool:
        return True


class BearerTokenAuthorizer:
    """`Authorization: Bearer <secret>` başlığını sabit süreli karşılaştırır."""

    def __init__(self, token: str) -> None:
        self._token = token.encode("utf-8")

    def authorize(self, request: Request) -> bool:
        header = request.headers.get("authorization") or ""
        if not header.startswith(BEARER_PREFIX):
            return False
        provided = header[len(BEARER_PREFIX) :].strip().encode("utf-8")
        return hmac.compare_digest(provided, self._token)


def authorizer_for(token: str | None) -> Authorizer:
    if not (token or "").strip():
        return AllowAllAuthorizer()
    return BearerTokenAuthorizer(token.strip())
