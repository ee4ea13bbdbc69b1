from typing import NamedTuple

from pydantic import BaseModel, Field


class RegistrationPayload(BaseModel):
    """POST/DELETE gövdesi; alanlar API katmanında kırpılmış ve doğrulanmış gelir."""
    identity: str
    push_token: str = Field(alias="pushToken")
    # Platforma özel yardımcı token; anahtar veya tekilleştirme için kullanılmaz
    secondary_token: str | None = Field(default=None, alias="secondaryToken")
    # Serbest etiket, yalnızca loglama için
    platform: str

    model_config = {"populate_by_name": True, "frozen": True}


class SubscriptionRecord(BaseModel):
    identity: str
    tokens: list[str]


class SubscriptionResult(BaseModel):
    success: bool
    total_tokens: int = Field(alias="totalTokens")

    model_config = {"populate_by_name": True}


class RegisterResult(NamedTuple):
    is_new_token: bool
    total_tokens: int


class UnregisterResult(NamedTuple):
    removed: bool
    total_tokens: int
