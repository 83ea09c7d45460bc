from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

RISK_PROFILES = ("conservative", "moderate", "aggressive")


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str

    storage_path: str
    storage_key: str

    currency_symbol: str
    default_risk_profile: str


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.
    """
    load_dotenv()  # loads .env into env vars

    cfg: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    # Empty env vars count as "not set" so they never mask config.yaml.
    def _env_or_cfg(key: str, cfg_path: str, default):
        v = os.getenv(key)
        if v is None:
            return _deep_get(cfg, cfg_path, default)
        v = v.strip()
        return _deep_get(cfg, cfg_path, default) if v == "" else v

    env = _env_or_cfg("APP_ENV", "app.env", "dev")
    log_level = _env_or_cfg("LOG_LEVEL", "app.log_level", "INFO")

    storage_path = _env_or_cfg("PLANNER_STORAGE_PATH", "storage.path", "data/planner_state.json")
    storage_key = _env_or_cfg("PLANNER_STORAGE_KEY", "storage.key", "goal-planner-v1")

    currency_symbol = _env_or_cfg("PLANNER_CURRENCY_SYMBOL", "display.currency_symbol", "₹")

    risk = str(_env_or_cfg("PLANNER_RISK_PROFILE", "planner.default_risk_profile", "moderate")).strip().lower()
    if risk not in RISK_PROFILES:
        risk = "moderate"

    return Settings(
        env=str(env),
        log_level=str(log_level),
        storage_path=str(storage_path),
        storage_key=str(storage_key),
        currency_symbol=str(currency_symbol),
        default_risk_profile=risk,
    )


# Optional convenience singleton
SETTINGS = load_settings()
