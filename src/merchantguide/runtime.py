# src/merchantguide/runtime.py
from __future__ import annotations

from contextvars import ContextVar
from dataclasses import asdict as _asdict
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # controls [debug] lines / tracebacks

    def apply(self, settings: Any) -> None:
        self.profile_name = (
            getattr(settings, "name", None)
            or getattr(settings, "_source", None)
            or "default"
        )

        if hasattr(settings, "as_dict") and callable(settings.as_dict):
            cfg = settings.as_dict()
        elif isinstance(settings, dict):
            cfg = settings
        else:
            cfg = {k: getattr(settings, k) for k in dir(settings) if k.isupper()}

        try:
            self.settings = dict(cfg)
        except Exception:
            self.settings = _asdict(cfg) if hasattr(cfg, "__dataclass_fields__") else {}

        dbg = self.get("BEHAVIOUR.DEBUG", None)
        if isinstance(dbg, bool):
            self.debug = self.debug or dbg

    def get(self, key: str, default: Any = None) -> Any:
        """Support dotted lookups, e.g., 'LEDGER.OVERWRITE_PRICES'."""
        if not key:
            return default
        cur = self.settings
        if "." in key:
            for part in key.split("."):
                if isinstance(cur, dict) and part in cur:
                    cur = cur[part]
                else:
                    return default
            return cur
        return cur.get(key, default)


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("merchantguide_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> Runtime:
    rt = Runtime()
    _current_runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)
