"""Pytest fixtures: test client'ları (bellek / dosya / secret'lı), geçici veri dosyası."""
import os

import pytest
from fastapi.testclient import TestClient

# Test ortamı (registry import edilmeden önce set edilmeli)
os.environ.setdefault("DATA_FILE", "")
# Rate limit kapalı (varsayılan); limit testleri kendi değerini verir
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "0")
os.environ.setdefault("TRUST_FORWARDED_FOR", "false")

from registry.core.config import Settings
from registry.core.rate_limit import limiter
from registry.main import create_app
from registry.services.subscription_store import SubscriptionStore

ADMIN_TOKEN = "admin-secret"
CLIENT_TOKEN = "client-secret"


def make_app(data_file="", admin_token="", client_token="", store=None):
    config = Settings(data_file=str(data_file), admin_token=admin_token, client_token=client_token)
    return create_app(config, store=store)


@pytest.fixture(autouse=True)
def _reset_rate_limit():
    limiter.reset()
    yield


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "subscriptions.json"


@pytest.fixture
def client():
    """Secret'sız, yalnızca bellek modunda TestClient; lifespan ile depo yüklenir."""
    with TestClient(make_app()) as c:
        yield c


@pytest.fixture
def file_client(data_file):
    with TestClient(make_app(data_file=data_file)) as c:
        yield c


@pytest.fixture
def secured_client():
    with TestClient(make_app(admin_token=ADMIN_TOKEN, client_token=CLIENT_TOKEN)) as c:
        yield c


@pytest.fixture
def store(data_file):
    return SubscriptionStore(data_file)


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def client_headers():
    return {"Authorization": f"Bearer {CLIENT_TOKEN}"}
