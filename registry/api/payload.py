import json
from typing import Any

from fastapi import Request

from registry.core.errors import ValidationError
from registry.schemas import RegistrationPayload


async def read_json_body(request: Request) -> Any:
    """Gövdenin tamamını okur; boş gövde {} sayılır."""
    body = await request.body()
    if not body:
        return {}
    try:
        return json.loads(body)
    except ValueError as e:
        raise ValidationError(f"Failed to parse request body: {e}") from e


def _string_field(raw: dict, name: str) -> str:
    value = raw.get(name)
    return value.strip() if isinstance(value, str) else ""


def parse_registration(raw: Any) -> RegistrationPayload:
    if not isinstance(raw, dict):
        raise ValidationError("Request body must be an object.")

    identity = _string_field(raw, "identity")
    push_token = _string_field(raw, "pushToken")
    platform = _string_field(raw, "platform")

    if not identity:
        raise ValidationError("Request body must include an identity.")
    if not push_token:
        raise ValidationError("Request body must include a push token.")
    if not platform:
        raise ValidationError("Request body must include a platform.")

    return RegistrationPayload(
        identity=identity,
        push_token=push_token,
        secondary_token=_string_field(raw, "secondaryToken") or None,
        platform=platform,
    )
