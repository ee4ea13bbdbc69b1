"""IP bazlı rate limiting (SlowAPI); varsayılan kapalı, X-Forwarded-For yalnızca ayarla okunur."""
from fastapi import Request

from slowapi import Limiter

from .config import settings


def _get_client_ip(request: Request) -> str:
    """Güvenilir proxy arkasında gerçek istemci IP; aksi halde bağlantı adresi."""
    if settings.trust_forwarded_for:
        xff = request.headers.get("x-forwarded-for")
        if xff:
            return xff.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "127.0.0.1"


def mutation_limit() -> str:
    # Her istekte okunur; ayar çalışma anında değiştirilebilir
    return f"{max(settings.rate_limit_per_minute, 1)}/minute"


def rate_limit_disabled() -> bool:
    return settings.rate_limit_per_minute <= 0


limiter = Limiter(key_func=_get_client_ip)
