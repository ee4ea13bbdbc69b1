"""
Abonelik deposu: identity -> push token kümesi.
Bellekteki harita tek doğruluk kaynağıdır; her değişiklik JSON dosyasına tamamen yeniden yazılır.
"""
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from registry.core.errors import PersistenceError, ValidationError
from registry.schemas import RegisterResult, RegistrationPayload, SubscriptionRecord, UnregisterResult

logger = logging.getLogger(__name__)


def normalize_identity(identity: str | None) -> str | None:
    if not identity:
        return None
    normalized = identity.strip().casefold()
    return normalized or None


def normalize_token(token: str | None) -> str | None:
    if not token:
        return None
    normalized = token.strip()
    return normalized or None


def parse_persisted_records(raw: Any) -> list[SubscriptionRecord]:
    """
    Diskteki JSON dizisini doğrular. Bozuk kayıt sessizce atlanmaz:
    tokenı kalmayan bir giriş bile ValueError fırlatır.
    """
    if not isinstance(raw, list):
        raise ValueError("Persisted subscription data must be an array.")

    records = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValueError(f"Persisted subscription entry at index {index} must be an object.")

        value = entry.get("identity")
        identity = normalize_identity(value if isinstance(value, str) else None)
        if not identity:
            raise ValueError(f"Persisted subscription entry at index {index} is missing a valid identity.")

        raw_tokens = entry.get("tokens")
        tokens = []
        if isinstance(raw_tokens, list):
            for token in raw_tokens:
                normalized = normalize_token(token if isinstance(token, str) else None)
                if normalized and normalized not in tokens:
                    tokens.append(normalized)
        if not tokens:
            raise ValueError(
                f"Persisted subscription entry at index {index} must include at least one push token."
            )

        records.append(SubscriptionRecord(identity=identity, tokens=tokens))
    return records


class SubscriptionStore:
    """
    identity -> token haritasının tek sahibi.

    register/unregister kilit altında çalışır; harita değişikliği ve diske yazma
    tek adım olarak sıralanır, böylece eşzamanlı istekler birbirinin yazımını ezmez.
    data_file None ise yalnızca bellek modu (testler için).
    """

    def __init__(self, data_file: str | Path | None = None) -> None:
        self._data_file = Path(data_file) if data_file else None
        # token sırası ekleme sırasıdır (dict anahtarları)
        self._records: dict[str, dict[str, None]] = {}
        self._lock = asyncio.Lock()

    @property
    def data_file(self) -> Path | None:
        return self._data_file

    def __len__(self) -> int:
        return len(self._records)

    async def load(self) -> None:
        if self._data_file is None:
            return

        if not await aiofiles.os.path.exists(self._data_file):
            logger.info(
                "Subscription data file not found, starting with an empty registry. data_file=%s",
                self._data_file,
            )
            self._records = {}
            return

        try:
            async with aiofiles.open(self._data_file, encoding="utf-8") as f:
                raw = await f.read()
            records = parse_persisted_records(json.loads(raw))
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Failed to load subscription data: {e}") from e

        loaded: dict[str, dict[str, None]] = {}
        for record in records:
            # Aynı identity'e normalize olan girişlerin tokenları birleştirilir (son giriş öncekini ezmez)
            loaded.setdefault(record.identity, {}).update(dict.fromkeys(record.tokens))
        self._records = loaded
        logger.info("Loaded subscriptions from disk. count=%s", len(self._records))

    async def register(self, payload: RegistrationPayload) -> RegisterResult:
        identity, token = self._normalize_payload(payload)

        async with self._lock:
            tokens = self._records.setdefault(identity, {})
            is_new_token = token not in tokens
            tokens[token] = None
            total = len(tokens)
            await self._persist()

        return RegisterResult(is_new_token=is_new_token, total_tokens=total)

    async def unregister(self, payload: RegistrationPayload) -> UnregisterResult:
        identity, token = self._normalize_payload(payload)

        async with self._lock:
            tokens = self._records.get(identity)
            if tokens is None:
                return UnregisterResult(removed=False, total_tokens=0)

            removed = token in tokens
            tokens.pop(token, None)
            if not tokens:
                del self._records[identity]

            # Değişiklik yoksa gereksiz yazma yapılmaz
            if removed:
                await self._persist()

            return UnregisterResult(removed=removed, total_tokens=len(tokens))

    def get_all(self) -> list[SubscriptionRecord]:
        # Event loop üzerinde, tek geçişte okunur; anahtar tekrar aranmaz
        return [
            SubscriptionRecord(identity=identity, tokens=list(tokens))
            for identity, tokens in sorted(self._records.items())
        ]

    def _normalize_payload(self, payload: RegistrationPayload) -> tuple[str, str]:
        identity = normalize_identity(payload.identity)
        if not identity:
            raise ValidationError("A valid identity is required.")
        token = normalize_token(payload.push_token)
        if not token:
            raise ValidationError("A valid push token is required.")
        return identity, token

    async def _persist(self) -> None:
        if self._data_file is None:
            return

        records = [record.model_dump() for record in self.get_all()]
        content = json.dumps(records, indent=2) + "\n"
        tmp_path = self._data_file.with_name(self._data_file.name + ".tmp")
        try:
            await aiofiles.os.makedirs(self._data_file.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(content)
            await aiofiles.os.replace(tmp_path, self._data_file)
        except OSError as e:
            # Bellek geri alınmaz; bir sonraki başarılı yazma tüm haritayı yeniden yazar
            raise PersistenceError(f"Failed to persist subscription data: {e.strerror or e}") from e
