import logging

from fastapi import APIRouter, Depends, Request

from registry.api.deps import get_store, require_admin, require_client
from registry.api.payload import parse_registration, read_json_body
from registry.core.rate_limit import limiter, mutation_limit, rate_limit_disabled
from registry.schemas import RegistrationPayload, SubscriptionRecord, SubscriptionResult
from registry.services.subscription_store import SubscriptionStore

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])
log = logging.getLogger("registry")


async def _validated_payload(request: Request, operation: str) -> RegistrationPayload:
    payload = parse_registration(await read_json_body(request))
    # Hata loglarında bağlam olarak kullanılır (registry.main)
    request.state.log_context = {
        "operation": operation,
        "identity": payload.identity,
        "platform": payload.platform,
    }
    return payload


@router.get("", response_model=list[SubscriptionRecord], dependencies=[Depends(require_admin)])
async def list_subscriptions(store: SubscriptionStore = Depends(get_store)):
    return store.get_all()


@router.post("", response_model=SubscriptionResult, dependencies=[Depends(require_client)])
@limiter.limit(mutation_limit, exempt_when=rate_limit_disabled)
async def register_subscription(request: Request, store: SubscriptionStore = Depends(get_store)):
    payload = await _validated_payload(request, "register")
    result = await store.register(payload)
    log.info(
        "Registered push token. identity=%s platform=%s secondary_token=%s is_new_token=%s total_tokens=%s",
        payload.identity,
        payload.platform,
        payload.secondary_token is not None,
        result.is_new_token,
        result.total_tokens,
    )
    return SubscriptionResult(success=True, total_tokens=result.total_tokens)


@router.delete("", response_model=SubscriptionResult, dependencies=[Depends(require_client)])
@limiter.limit(mutation_limit, exempt_when=rate_limit_disabled)
async def unregister_subscription(request: Request, store: SubscriptionStore = Depends(get_store)):
    payload = await _validated_payload(request, "unregister")
    result = await store.unregister(payload)
    log.info(
        "Removed push token. identity=%s platform=%s removed=%s total_tokens=%s",
        payload.identity,
        payload.platform,
        result.removed,
        result.total_tokens,
    )
    return SubscriptionResult(success=result.removed, total_tokens=result.total_tokens)
