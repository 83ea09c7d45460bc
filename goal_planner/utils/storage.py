from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from pydantic import ValidationError

from goal_planner.core.schemas import Portfolio
from goal_planner.utils.logging import get_logger
from goal_planner.utils.portfolio_ops import default_portfolio

log = get_logger(__name__)

DEFAULT_KEY = "goal-planner-v1"


class PortfolioStore(Protocol):
    def load(self) -> Optional[Portfolio]: ...

    def save(self, portfolio: Portfolio) -> None: ...


def _parse_record(record: Any) -> Optional[Portfolio]:
    if not isinstance(record, dict):
        return None
    try:
        return Portfolio.model_validate(record)
    except ValidationError as e:
        log.warning("Stored portfolio failed validation: %s", e.error_count())
        return None


class InMemoryStore:
    """Holds the serialized record, so save/load round-trips like a real store."""

    def __init__(self, raw: Optional[str] = None) -> None:
        self.raw = raw

    def load(self) -> Optional[Portfolio]:
        if not self.raw:
            return None
        try:
            record = json.loads(self.raw)
        except json.JSONDecodeError:
            log.warning("In-memory portfolio record is not valid JSON; ignoring it")
            return None
        return _parse_record(record)

    def save(self, portfolio: Portfolio) -> None:
        self.raw = portfolio.model_dump_json()


class JsonFileStore:
    """
    Key-value JSON file: {"<key>": {"goals": [...], "risk_profile": ..., "monthly_income": ...}}.
    Other keys in the file are preserved on save.
    """

    def __init__(self, path: str, key: str = DEFAULT_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            log.warning("Could not read planner state from %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> Optional[Portfolio]:
        record = self._read_all().get(self.key)
        if record is None:
            return None
        pf = _parse_record(record)
        if pf is None:
            log.warning("Ignoring malformed planner state under key=%s in %s", self.key, self.path)
        return pf

    def save(self, portfolio: Portfolio) -> None:
        data = self._read_all()
        data[self.key] = portfolio.model_dump(mode="json")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        log.debug("Saved %d goal(s) to %s", len(portfolio.goals), self.path)


def load_portfolio(store: PortfolioStore) -> Portfolio:
    """Stored portfolio, or the default single-goal portfolio when nothing usable is stored."""
    stored = store.load()
    if stored is None:
        return default_portfolio()
    if not stored.goals:
        return default_portfolio(risk_profile=stored.risk_profile, monthly_income=stored.monthly_income)
    return stored
