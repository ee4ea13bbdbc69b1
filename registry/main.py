import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# Uvicorn nereden çalışırsa çalışsın .env proje kökünden yüklensin
_PROJ_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJ_ROOT / ".env")

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from registry.api.subscriptions import router as subscriptions_router
from registry.core.config import Settings, settings
from registry.core.cors import cors_headers, cors_middleware
from registry.core.errors import PersistenceError, RegistryError
from registry.core.rate_limit import limiter
from registry.core.security import authorizer_for
from registry.logging import setup_logging
from registry.services.subscription_store import SubscriptionStore

setup_logging(level=settings.log_level)
log = logging.getLogger("registry")


def _error_response(status_code: int, detail: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": detail}, headers=headers)


def _log_context(request: Request) -> str:
    rid = getattr(request.state, "request_id", None)
    context = {"request_id": rid, "method": request.method, "path": request.url.path}
    context.update(getattr(request.state, "log_context", None) or {})
    return " ".join(f"{k}={v}" for k, v in context.items())


def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    if isinstance(exc, PersistenceError):
        log.error("Subscription persistence failed: %s %s", exc, _log_context(request))
        return _error_response(exc.status_code, "Failed to persist subscription data.")
    log.warning("Registry request rejected: %s %s", exc, _log_context(request))
    return _error_response(exc.status_code, str(exc))


def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Yalnızca birebir yol+metot eşleşmesi: bilinmeyen metot da 404
    if exc.status_code in (404, 405):
        return _error_response(404, "Not found.")
    return _error_response(exc.status_code, exc.detail if isinstance(exc.detail, str) else str(exc.detail))


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    log.warning("Rate limit exceeded: %s %s", exc.detail, _log_context(request))
    return _error_response(429, "Too many requests.")


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled exception: %s", _log_context(request), exc_info=exc)
    # Bu yanıt middleware'den geçmez; CORS başlıkları burada eklenir
    return _error_response(500, "Unexpected server error.", headers=cors_headers(request))


async def request_id_and_latency(request: Request, call_next):
    request.state.request_id = str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    latency_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = request.state.request_id
    log.info(
        "request_id=%s method=%s path=%s status=%s latency_ms=%.2f",
        request.state.request_id,
        request.method,
        request.url.path,
        response.status_code,
        latency_ms,
    )
    return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: SubscriptionStore = app.state.store
    # Bozuk kalıcı veri başlatmayı durdurur (PersistenceError)
    await store.load()
    config: Settings = app.state.settings
    log.info(
        "Registry ready: persistence=%s subscriptions=%s admin_auth=%s client_auth=%s",
        store.data_file or "memory",
        len(store),
        "yes" if config.admin_token else "open",
        "yes" if config.client_token else "open",
    )
    yield


def create_app(config: Settings | None = None, store: SubscriptionStore | None = None) -> FastAPI:
    """Ayrı ayar ve depo ile uygulama kurar; testler kendi örneklerini verir."""
    config = config or settings
    app = FastAPI(
        title="Notifier Registry API",
        description="Push bildirim abonelik kaydı (identity -> push token)",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = config
    app.state.store = store if store is not None else SubscriptionStore(config.data_path)
    app.state.admin_authorizer = authorizer_for(config.admin_token)
    app.state.client_authorizer = authorizer_for(config.client_token)
    app.state.limiter = limiter

    app.add_exception_handler(RegistryError, registry_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Son eklenen en dıştadır: her istek (OPTIONS dahil) loglanır
    app.middleware("http")(cors_middleware)
    app.middleware("http")(request_id_and_latency)

    app.include_router(subscriptions_router)

    @app.get("/health")
    def health():
        current: SubscriptionStore = app.state.store
        return {
            "status": "ok",
            "subscriptions": len(current),
            "persistence": "file" if current.data_file else "memory",
        }

    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
