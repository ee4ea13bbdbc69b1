"""
Registry loglaması: stdout'a tek satırlık kayıtlar.
- registry.main: istek başına request_id/method/path/status/latency satırı ve hata bağlamı
- registry.api.subscriptions: kayıt/silme sonucu (identity, platform, token sayısı)
- registry.services.subscription_store: dosya yükleme ve yazma hataları
İstek satırı middleware'de yazıldığı için uvicorn.access tekrar etmesin diye WARNING'e çekilir.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: int | str = logging.INFO, format_string: str = LOG_FORMAT) -> None:
    logging.basicConfig(level=level, format=format_string, stream=sys.stdout, force=True)
    logging.getLogger("registry").setLevel(level)
    logging.getLogger("uvicorn").setLevel(level)
    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
