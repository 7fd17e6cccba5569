from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from loguru import logger

load_dotenv()

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "compliance" / "data" / "jurisdictions.yaml"


@dataclass(frozen=True)
class Settings:
    catalog_path: str = str(DEFAULT_CATALOG_PATH)
    min_scan_dpi: int = 300
    illegible_ratio_threshold: float = 0.2
    warning_penalty: int = 5
    batch_max_workers: int = 4
    debug: bool = False


_ENV = {
    "COMPLIANCE_CATALOG_PATH": ("catalog_path", str),
    "COMPLIANCE_MIN_SCAN_DPI": ("min_scan_dpi", int),
    "COMPLIANCE_ILLEGIBLE_RATIO": ("illegible_ratio_threshold", float),
    "COMPLIANCE_WARNING_PENALTY": ("warning_penalty", int),
    "COMPLIANCE_BATCH_WORKERS": ("batch_max_workers", int),
}


def _cast(key: str, raw: Any, cast, default: Any) -> Any:
    if cast is bool:
        return raw if isinstance(raw, bool) else str(raw).strip().lower() in {"1", "true", "yes"}
    try:
        return cast(raw)
    except (TypeError, ValueError):
        logger.warning("config: invalid value for {}: {!r}; using {!r}", key, raw, default)
        return default


def _from_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        logger.warning("config: {} is not a mapping; ignored", path)
        return {}
    section = data.get("compliance", data)
    known = {f.name for f in fields(Settings)}
    return {k: v for k, v in section.items() if k in known}


def load_settings(path: Optional[str] = None) -> Settings:
    """Build settings from defaults, an optional YAML file and the environment.

    ``path`` overrides the ``COMPLIANCE_CONFIG`` lookup. Environment variables
    win over the file.
    """
    base = Settings()
    values: Dict[str, Any] = {}

    cfg_path = path or os.getenv("COMPLIANCE_CONFIG")
    if cfg_path:
        for key, raw in _from_yaml(cfg_path).items():
            default = getattr(base, key)
            values[key] = _cast(key, raw, type(default), default)

    for env, (key, cast) in _ENV.items():
        raw = os.getenv(env)
        if raw is None or raw.strip() == "":
            continue
        values[key] = _cast(env, raw.strip(), cast, values.get(key, getattr(base, key)))

    if "COMPLIANCE_DEBUG" in os.environ:
        values["debug"] = os.getenv("COMPLIANCE_DEBUG") == "1"

    return replace(base, **values)


__all__ = ["Settings", "load_settings", "DEFAULT_CATALOG_PATH"]
