from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env proje kökünde: registry/core/config.py -> registry/core -> registry -> kök
_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _ROOT / ".env"


class Settings(BaseSettings):
    # Kalıcı JSON dosyası; boşsa kayıtlar yalnızca bellekte tutulur
    data_file: str = ""
    # GET /subscriptions için Bearer secret (boşsa açık)
    admin_token: str = ""
    # POST/DELETE /subscriptions için Bearer secret (boşsa açık)
    client_token: str = ""
    host: str = "0.0.0.0"
    port: int = 8787
    log_level: str = "INFO"
    # IP başına dakikada max kayıt/silme isteği; 0 = kapalı (istemciler 4xx tekrar denemez)
    rate_limit_per_minute: int = 0
    # Yalnızca güvenilir bir proxy arkasında açılmalı; aksi halde X-Forwarded-For yok sayılır
    trust_forwarded_for: bool = False

    model_config = {
        "env_file": _ENV_FILE if _ENV_FILE.is_file() else ".env",
        "extra": "ignore",
    }

    @field_validator("admin_token", "client_token", "data_file", mode="before")
    @classmethod
    def strip_value(cls, v: str | None) -> str:
        """Kopyala-yapıştır kaynaklı boşlukları temizler."""
        return (v or "").strip()

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str | None) -> str:
        return (v or "INFO").strip().upper()

    @property
    def data_path(self) -> Path | None:
        return Path(self.data_file) if self.data_file else None


settings = Settings()
