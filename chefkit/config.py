from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


@dataclass(frozen=True)
class Settings:
    api_url: str
    database_url: str
    cart_storage_key: str
    tax_rate: float
    delivery_fee: float
    http_timeout: float
    log_level: str


def load_settings() -> Settings:
    return Settings(
        api_url=_get_env("CHEFKIT_API_URL", "NEXT_PUBLIC_API_URL", default="http://localhost:5000")
        or "http://localhost:5000",
        database_url=_get_env("DATABASE_URL", default="sqlite+pysqlite:///./chefkit.db")
        or "sqlite+pysqlite:///./chefkit.db",
        cart_storage_key=_get_env("CART_STORAGE_KEY", default="chefkit_cart") or "chefkit_cart",
        tax_rate=_get_float("TAX_RATE", default=0.10),
        delivery_fee=_get_float("DELIVERY_FEE", default=5.99),
        http_timeout=_get_float("HTTP_TIMEOUT", default=10.0),
        log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
    )

