# settleup/config.py
# -----------------------------------------------------------------------------
# SETTINGS (environment / .env)
# -----------------------------------------------------------------------------
#   • SETTLEUP_PRECISION             - decimal places for rounding (default 2)
#   • SETTLEUP_EPSILON               - noise floor for the settle-up loop
#   • SETTLEUP_UNKNOWN_MEMBER_POLICY - ignore | collect | reject
#   • SETTLEUP_LOG_LEVEL             - root logging level for the app
#   • SETTLEUP_CORS_ORIGINS          - comma-separated list of allowed origins
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
from decimal import Decimal
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _csv_env(name: str) -> List[str]:
    raw = os.getenv(name) or ""
    return [item.strip() for item in raw.split(",") if item.strip()]


DEFAULT_PRECISION: int = _int_env("SETTLEUP_PRECISION", 2)
SETTLE_EPSILON: Decimal = Decimal(os.getenv("SETTLEUP_EPSILON") or "1e-9")
UNKNOWN_MEMBER_POLICY: str = (os.getenv("SETTLEUP_UNKNOWN_MEMBER_POLICY") or "ignore").lower().strip()
if UNKNOWN_MEMBER_POLICY not in ("ignore", "collect", "reject"):
    raise ValueError(
        f"SETTLEUP_UNKNOWN_MEMBER_POLICY must be ignore, collect or reject, got {UNKNOWN_MEMBER_POLICY!r}"
    )
if DEFAULT_PRECISION < 0:
    raise ValueError(f"SETTLEUP_PRECISION must be >= 0, got {DEFAULT_PRECISION}")

LOG_LEVEL: str = (os.getenv("SETTLEUP_LOG_LEVEL") or "INFO").upper()

CORS_ORIGINS: List[str] = _csv_env("SETTLEUP_CORS_ORIGINS") or [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
