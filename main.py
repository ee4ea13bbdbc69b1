"""Yerel çalıştırma: python main.py (HOST/PORT .env veya ortamdan okunur)."""
from registry.main import run

if __name__ == "__main__":
    run()
